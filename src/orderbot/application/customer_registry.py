"""Application service: Customer Registry.

Maps an inbound channel identifier to exactly one customer record,
creating it on first contact and keeping the display name current.
"""

from __future__ import annotations

import structlog

from orderbot.domain.exceptions import ConflictError, NotFoundError, StorageError
from orderbot.domain.model.customer import (
    DEFAULT_CUSTOMER_NAME,
    Customer,
    normalize_channel_id,
)
from orderbot.domain.repository.customer_repository import CustomerRepository

log = structlog.get_logger(__name__)


class CustomerRegistry:

    def __init__(
        self,
        customer_repo: CustomerRepository,
        default_name: str = DEFAULT_CUSTOMER_NAME,
    ) -> None:
        self._customer_repo = customer_repo
        self._default_name = default_name

    def resolve(self, channel_id: str, display_name: str | None = None) -> Customer:
        """Return the customer for *channel_id*, creating it if needed.

        Uniqueness is the store's job: when two callers race to create the
        same customer, the loser's insert raises ConflictError and is
        answered with a re-read of the winner's record.
        """
        channel_id = normalize_channel_id(channel_id)

        customer = self._customer_repo.get_by_channel_id(channel_id)
        if customer is None:
            try:
                created = self._customer_repo.add(
                    Customer.create(channel_id, display_name, self._default_name)
                )
            except ConflictError:
                log.debug("customer.insert_conflict", channel_id=channel_id)
                customer = self._customer_repo.get_by_channel_id(channel_id)
                if customer is None:
                    raise StorageError(
                        f"Customer '{channel_id}' conflicted on insert but cannot be read back"
                    ) from None
            else:
                log.info("customer.created", customer_id=created.id, channel_id=channel_id)
                return created

        if customer.wants_rename(display_name):
            renamed = self._customer_repo.rename(customer.id, display_name.strip())
            log.info("customer.renamed", customer_id=renamed.id, name=renamed.name)
            return renamed

        return customer

    def find(self, channel_id: str) -> Customer:
        """Look a customer up without creating one."""
        channel_id = normalize_channel_id(channel_id)
        customer = self._customer_repo.get_by_channel_id(channel_id)
        if customer is None:
            raise NotFoundError(f"Customer '{channel_id}' not found")
        return customer
