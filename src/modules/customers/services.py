"""Customer service layer (Use Cases).

Orchestrates the Customer aggregate and delegates persistence to the
injected ``ICustomerRepository``.  Every command follows the same shape:
load the aggregate, call one aggregate method (which enforces the
intra-customer rules), then hand the aggregate back to the repository
(which enforces cross-customer document uniqueness and completeness).

Domain exceptions propagate unchanged; the API layer maps them to HTTP.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.db import transaction

from modules.customers.domain import Customer
from modules.customers.exceptions import CustomerNotFound

if TYPE_CHECKING:
    from modules.customers.dtos import (
        AddressDTO,
        AddressKeyDTO,
        CreateCustomerDTO,
        DocumentDTO,
        DocumentKeyDTO,
        EmailDTO,
        EmailKeyDTO,
        PhoneDTO,
        PhoneKeyDTO,
        RenameCustomerDTO,
    )
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    ``verify_document_checksum`` defaults to the
    ``CUSTOMERS_VERIFY_DOCUMENT_CHECKSUM`` setting.
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        verify_document_checksum: Optional[bool] = None,
    ) -> None:
        self._repo = repository
        if verify_document_checksum is None:
            verify_document_checksum = getattr(
                settings, "CUSTOMERS_VERIFY_DOCUMENT_CHECKSUM", False
            )
        self._verify_checksum = verify_document_checksum

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, id: UUID | str) -> Customer:
        customer = self._repo.get_by_id(id)
        if customer is None:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer

    def _apply(
        self, id: UUID | str, event: str, change: Callable[[Customer], object]
    ) -> Customer:
        """Load, mutate, persist; the unit of work for every command."""
        customer = self._load(id)
        change(customer)
        self._repo.update(customer)
        logger.info(event, customer_id=str(customer.id))
        return customer

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Build a customer from ``dto`` and persist it.

        Raises:
            InvalidCustomerData / DuplicateCustomerData: from the aggregate.
            DocumentAlreadyInUse: a document belongs to another customer.
            CustomerInvariantViolation: the customer is incomplete.
        """
        customer = Customer.create(dto.name)
        for email in dto.emails:
            customer.add_email(email.value, email.is_primary)
        for phone in dto.phones:
            customer.add_phone(phone.area_code, phone.number, phone.is_primary)
        for address in dto.addresses:
            customer.add_address(
                address.street,
                address.number,
                address.city,
                address.state,
                address.zip_code,
                address.country,
                complement=address.complement,
                is_primary=address.is_primary,
            )
        for document in dto.documents:
            customer.add_document(
                document.number, document.document_type, self._verify_checksum
            )

        self._repo.add(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def rename_customer(self, id: UUID | str, dto: RenameCustomerDTO) -> Customer:
        return self._apply(id, "customer.renamed", lambda c: c.update_name(dto.name))

    @transaction.atomic
    def delete_customer(self, id: UUID | str) -> None:
        """Remove a customer permanently.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        self._repo.delete(id)
        logger.info("customer.deleted", customer_id=str(id))

    @transaction.atomic
    def activate_customer(self, id: UUID | str) -> Customer:
        return self._apply(id, "customer.activated", lambda c: c.activate())

    @transaction.atomic
    def deactivate_customer(self, id: UUID | str) -> Customer:
        return self._apply(id, "customer.deactivated", lambda c: c.deactivate())

    # -- emails ---------------------------------------------------------

    @transaction.atomic
    def add_email(self, id: UUID | str, dto: EmailDTO) -> Customer:
        return self._apply(
            id, "customer.email_added", lambda c: c.add_email(dto.value, dto.is_primary)
        )

    @transaction.atomic
    def remove_email(self, id: UUID | str, key: EmailKeyDTO) -> Customer:
        return self._apply(id, "customer.email_removed", lambda c: c.remove_email(key.value))

    @transaction.atomic
    def set_primary_email(self, id: UUID | str, key: EmailKeyDTO) -> Customer:
        return self._apply(
            id, "customer.primary_email_set", lambda c: c.set_primary_email(key.value)
        )

    # -- phones ---------------------------------------------------------

    @transaction.atomic
    def add_phone(self, id: UUID | str, dto: PhoneDTO) -> Customer:
        return self._apply(
            id,
            "customer.phone_added",
            lambda c: c.add_phone(dto.area_code, dto.number, dto.is_primary),
        )

    @transaction.atomic
    def remove_phone(self, id: UUID | str, key: PhoneKeyDTO) -> Customer:
        return self._apply(
            id,
            "customer.phone_removed",
            lambda c: c.remove_phone(key.area_code, key.number),
        )

    @transaction.atomic
    def set_primary_phone(self, id: UUID | str, key: PhoneKeyDTO) -> Customer:
        return self._apply(
            id,
            "customer.primary_phone_set",
            lambda c: c.set_primary_phone(key.area_code, key.number),
        )

    # -- addresses ------------------------------------------------------

    @transaction.atomic
    def add_address(self, id: UUID | str, dto: AddressDTO) -> Customer:
        return self._apply(
            id,
            "customer.address_added",
            lambda c: c.add_address(
                dto.street,
                dto.number,
                dto.city,
                dto.state,
                dto.zip_code,
                dto.country,
                complement=dto.complement,
                is_primary=dto.is_primary,
            ),
        )

    @transaction.atomic
    def remove_address(self, id: UUID | str, key: AddressKeyDTO) -> Customer:
        return self._apply(
            id,
            "customer.address_removed",
            lambda c: c.remove_address(key.street, key.number, key.city),
        )

    @transaction.atomic
    def set_primary_address(self, id: UUID | str, key: AddressKeyDTO) -> Customer:
        return self._apply(
            id,
            "customer.primary_address_set",
            lambda c: c.set_primary_address(key.street, key.number, key.city),
        )

    # -- documents ------------------------------------------------------

    @transaction.atomic
    def add_document(self, id: UUID | str, dto: DocumentDTO) -> Customer:
        return self._apply(
            id,
            "customer.document_added",
            lambda c: c.add_document(dto.number, dto.document_type, self._verify_checksum),
        )

    @transaction.atomic
    def remove_document(self, id: UUID | str, key: DocumentKeyDTO) -> Customer:
        return self._apply(
            id, "customer.document_removed", lambda c: c.remove_document(key.number)
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        return self._repo.get_all()

    def get_customer(self, id: UUID | str) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._load(id)
        logger.info("customer.retrieved", customer_id=str(id))
        return customer

    def find_by_document(self, number: str) -> Customer:
        """Retrieve the customer holding a document number.

        Raises:
            CustomerNotFound: if no customer holds it.
        """
        customer = self._repo.get_by_document(number)
        if customer is None:
            raise CustomerNotFound("No customer holds this document.")
        return customer
