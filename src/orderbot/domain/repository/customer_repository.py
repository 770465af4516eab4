"""Abstract repository for the Customer entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderbot.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_channel_id(self, channel_id: str) -> Customer | None:
        """Return the customer for a channel identifier, or None."""

    @abstractmethod
    def add(self, customer: Customer) -> Customer:
        """Insert a new customer and return it with its assigned id.

        Raises ConflictError if the channel identifier is already taken.
        """

    @abstractmethod
    def rename(self, customer_id: int, name: str) -> Customer:
        """Change a customer's display name and return the updated record."""
