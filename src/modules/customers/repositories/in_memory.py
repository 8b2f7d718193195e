"""In-memory implementation of the Customer repository.

Used by the service-layer unit tests and by anything that needs a
storage-free ``ICustomerRepository``.  A single re-entrant lock serializes
every write, so the document uniqueness check and the write that follows
it cannot interleave with another writer.  Entities go in and come out as
deep copies: holding a returned customer never aliases stored state.
"""

from __future__ import annotations

import copy
import threading
from typing import Dict, List, Optional
from uuid import UUID

import structlog

from modules.customers.domain import Customer, normalize_document_number
from modules.customers.exceptions import (
    CustomerNotFound,
    DocumentAlreadyInUse,
    DuplicateCustomerData,
)
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


def coerce_id(id: UUID | str) -> Optional[UUID]:
    """Return ``id`` as a UUID, or ``None`` when it is malformed."""
    if isinstance(id, UUID):
        return id
    try:
        return UUID(str(id))
    except ValueError:
        return None


class InMemoryCustomerRepository(ICustomerRepository):
    """Dict-backed Customer repository guarded by one lock."""

    def __init__(self) -> None:
        self._customers: Dict[UUID, Customer] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID | str) -> Optional[Customer]:
        key = coerce_id(id)
        with self._lock:
            customer = self._customers.get(key) if key else None
            return copy.deepcopy(customer) if customer else None

    def get_all(self) -> List[Customer]:
        with self._lock:
            return [copy.deepcopy(c) for c in self._customers.values()]

    def get_by_document(self, number: str) -> Optional[Customer]:
        with self._lock:
            customer = self._holder_of(normalize_document_number(number))
            return copy.deepcopy(customer) if customer else None

    def document_exists(self, number: str) -> bool:
        with self._lock:
            return self._holder_of(normalize_document_number(number)) is not None

    def customer_exists(self, id: UUID | str) -> bool:
        key = coerce_id(id)
        with self._lock:
            return key is not None and key in self._customers

    def _holder_of(self, number: str, exclude: Optional[UUID] = None) -> Optional[Customer]:
        if not number:
            return None
        for customer in self._customers.values():
            if customer.id != exclude and customer.has_document(number):
                return customer
        return None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, entity: Customer) -> None:
        """Store a new customer.

        Raises:
            DuplicateCustomerData: the ID is already stored.
            DocumentAlreadyInUse: a document belongs to a stored customer.
            CustomerInvariantViolation: ``validate_for_persistence`` failed.
        """
        with self._lock:
            if entity.id in self._customers:
                raise DuplicateCustomerData(
                    f"Customer with ID '{entity.id}' already exists."
                )
            for document in entity.documents:
                if self.document_exists(document.number):
                    logger.warning(
                        "customer.document_conflict",
                        customer_id=str(entity.id),
                        document_type=document.document_type,
                    )
                    raise DocumentAlreadyInUse(
                        f"A customer with document '{document.number}' already exists."
                    )
            entity.validate_for_persistence()
            self._customers[entity.id] = copy.deepcopy(entity)
        logger.info("customer.saved", customer_id=str(entity.id), is_new=True)

    def update(self, entity: Customer) -> None:
        """Replace the stored version of ``entity``.

        Raises:
            CustomerNotFound: no customer with this ID.
            DocumentAlreadyInUse: a document belongs to another customer.
            CustomerInvariantViolation: ``validate_for_persistence`` failed.
        """
        with self._lock:
            if entity.id not in self._customers:
                raise CustomerNotFound(
                    f"Customer with ID '{entity.id}' not found for update."
                )
            for document in entity.documents:
                if self._holder_of(document.number, exclude=entity.id):
                    logger.warning(
                        "customer.document_conflict",
                        customer_id=str(entity.id),
                        document_type=document.document_type,
                    )
                    raise DocumentAlreadyInUse(
                        f"Document '{document.number}' is already associated "
                        "with another customer."
                    )
            entity.validate_for_persistence()
            self._customers[entity.id] = copy.deepcopy(entity)
        logger.info("customer.saved", customer_id=str(entity.id), is_new=False)

    def delete(self, id: UUID | str) -> None:
        """Remove a customer.

        Raises:
            CustomerNotFound: no customer with this ID.
        """
        key = coerce_id(id)
        with self._lock:
            if key is None or key not in self._customers:
                raise CustomerNotFound(
                    f"Customer with ID '{id}' not found for deletion."
                )
            del self._customers[key]
        logger.info("customer.deleted", customer_id=str(key))
