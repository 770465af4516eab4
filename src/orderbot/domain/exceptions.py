"""Domain-level exceptions.

Every failure the core can report is a subclass of DomainException, so
callers (the CLI, a messaging adapter) can tell "no data" apart from
"operation failed" and translate each kind into a channel message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""


class NotFoundError(DomainException):
    """A referenced order, customer or product does not exist."""


class ConflictError(DomainException):
    """A uniqueness constraint rejected an insert."""


class StorageError(DomainException):
    """The underlying store is unreachable or failed unexpectedly."""


class StoreTimeoutError(StorageError, TimeoutError):
    """A store call gave up waiting for a lock or a connection."""
