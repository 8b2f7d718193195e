"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups needed to keep
document numbers unique across customers: the one rule the aggregate
cannot check on its own.

Contract every implementation honours:

- ``add``: reject any document already used by a stored customer
  (``DocumentAlreadyInUse``), then ``validate_for_persistence``, then
  commit.  A failure leaves storage unchanged.
- ``update``: ``CustomerNotFound`` if the ID is unknown; reject documents
  held by *other* customers; validate; replace the stored version.
- ``delete``: ``CustomerNotFound`` if the ID is unknown.
- The document check and the write are atomic with respect to other
  writers.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.domain import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_document(self, number: str) -> Optional[Customer]:
        """Retrieve the customer holding a document number (any format)."""

    @abstractmethod
    def document_exists(self, number: str) -> bool:
        """``True`` when any stored customer holds this document number."""

    @abstractmethod
    def customer_exists(self, id: UUID | str) -> bool:
        """``True`` when a customer with this ID is stored."""
