"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` by mapping the aggregate onto
``CustomerRecord`` and its child tables.  Every write runs inside
``transaction.atomic()``; the document pre-check gives a friendly error,
and the UNIQUE index on ``customer_document_claims.number`` closes the
race between two writers that both pass the pre-check (the loser's
``IntegrityError`` becomes ``DocumentAlreadyInUse``).  A customer claims
each distinct number once, so it may hold one number under several types.

Look-ups follow the Null Object pattern: they return ``None`` for unknown
or malformed IDs instead of raising.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.customers.domain import (
    Address,
    Customer,
    Document,
    Email,
    Phone,
    normalize_document_number,
)
from modules.customers.exceptions import (
    CustomerNotFound,
    DocumentAlreadyInUse,
    DuplicateCustomerData,
)
from modules.customers.models import (
    CustomerAddressRecord,
    CustomerDocumentClaim,
    CustomerDocumentRecord,
    CustomerEmailRecord,
    CustomerPhoneRecord,
    CustomerRecord,
)
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

_COLLECTIONS = ("emails", "phones", "addresses", "documents")


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _queryset():
        return CustomerRecord.objects.prefetch_related(*_COLLECTIONS)

    @staticmethod
    def _to_domain(record: CustomerRecord) -> Customer:
        return Customer.rehydrate(
            id=record.id,
            name=record.name,
            emails=[
                Email(value=row.value, is_primary=row.is_primary)
                for row in record.emails.all()
            ],
            phones=[
                Phone(area_code=row.area_code, number=row.number, is_primary=row.is_primary)
                for row in record.phones.all()
            ],
            addresses=[
                Address(
                    street=row.street,
                    number=row.number,
                    city=row.city,
                    state=row.state,
                    zip_code=row.zip_code,
                    country=row.country,
                    complement=row.complement,
                    is_primary=row.is_primary,
                )
                for row in record.addresses.all()
            ],
            documents=[
                Document(number=row.number, document_type=row.document_type)
                for row in record.documents.all()
            ],
            created_at=record.created_at,
            updated_at=record.updated_at,
            is_active=record.is_active,
        )

    @staticmethod
    def _write_collections(record: CustomerRecord, entity: Customer) -> None:
        CustomerEmailRecord.objects.bulk_create(
            CustomerEmailRecord(
                customer=record, position=i, value=e.value, is_primary=e.is_primary
            )
            for i, e in enumerate(entity.emails)
        )
        CustomerPhoneRecord.objects.bulk_create(
            CustomerPhoneRecord(
                customer=record,
                position=i,
                area_code=p.area_code,
                number=p.number,
                is_primary=p.is_primary,
            )
            for i, p in enumerate(entity.phones)
        )
        CustomerAddressRecord.objects.bulk_create(
            CustomerAddressRecord(
                customer=record,
                position=i,
                street=a.street,
                number=a.number,
                complement=a.complement,
                city=a.city,
                state=a.state,
                zip_code=a.zip_code,
                country=a.country,
                is_primary=a.is_primary,
            )
            for i, a in enumerate(entity.addresses)
        )
        CustomerDocumentRecord.objects.bulk_create(
            CustomerDocumentRecord(
                customer=record,
                position=i,
                number=d.number,
                document_type=d.document_type,
            )
            for i, d in enumerate(entity.documents)
        )
        CustomerDocumentClaim.objects.bulk_create(
            CustomerDocumentClaim(customer=record, number=number)
            for number in dict.fromkeys(d.number for d in entity.documents)
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID | str) -> Optional[Customer]:
        """Retrieve a customer by ID.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            record = self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        return self._to_domain(record) if record else None

    def get_all(self) -> List[Customer]:
        return [self._to_domain(record) for record in self._queryset()]

    def get_by_document(self, number: str) -> Optional[Customer]:
        cleaned = normalize_document_number(number)
        if not cleaned:
            return None
        record = self._queryset().filter(documents__number=cleaned).first()
        return self._to_domain(record) if record else None

    def document_exists(self, number: str) -> bool:
        cleaned = normalize_document_number(number)
        return bool(cleaned) and CustomerDocumentRecord.objects.filter(number=cleaned).exists()

    def customer_exists(self, id: UUID | str) -> bool:
        try:
            return CustomerRecord.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, entity: Customer) -> None:
        """Insert a new customer and its collections atomically.

        Raises:
            DuplicateCustomerData: the ID is already stored.
            DocumentAlreadyInUse: a document belongs to a stored customer.
            CustomerInvariantViolation: ``validate_for_persistence`` failed.
        """
        log = logger.bind(customer_id=str(entity.id))
        try:
            with transaction.atomic():
                if CustomerRecord.objects.filter(id=entity.id).exists():
                    raise DuplicateCustomerData(
                        f"Customer with ID '{entity.id}' already exists."
                    )
                for document in entity.documents:
                    if self.document_exists(document.number):
                        log.warning(
                            "customer.document_conflict",
                            document_type=document.document_type,
                        )
                        raise DocumentAlreadyInUse(
                            f"A customer with document '{document.number}' already exists."
                        )
                entity.validate_for_persistence()

                record = CustomerRecord.objects.create(
                    id=entity.id,
                    name=entity.name,
                    is_active=entity.is_active,
                    created_at=entity.created_at,
                    updated_at=entity.updated_at,
                )
                self._write_collections(record, entity)
        except IntegrityError as exc:
            log.warning("customer.document_conflict", race=True)
            raise DocumentAlreadyInUse(
                "A document of this customer is already used by another customer."
            ) from exc
        log.info("customer.saved", is_new=True)

    def update(self, entity: Customer) -> None:
        """Replace the stored customer and all of its collections.

        The customer row is locked (``SELECT FOR UPDATE``) for the duration
        of the transaction so concurrent updates of the same customer
        serialize.

        Raises:
            CustomerNotFound: no customer with this ID.
            DocumentAlreadyInUse: a document belongs to another customer.
            CustomerInvariantViolation: ``validate_for_persistence`` failed.
        """
        log = logger.bind(customer_id=str(entity.id))
        try:
            with transaction.atomic():
                record = (
                    CustomerRecord.objects.select_for_update()
                    .filter(id=entity.id)
                    .first()
                )
                if record is None:
                    raise CustomerNotFound(
                        f"Customer with ID '{entity.id}' not found for update."
                    )

                clash = (
                    CustomerDocumentRecord.objects.filter(
                        number__in=[d.number for d in entity.documents]
                    )
                    .exclude(customer_id=entity.id)
                    .first()
                )
                if clash is not None:
                    log.warning(
                        "customer.document_conflict",
                        document_type=clash.document_type,
                    )
                    raise DocumentAlreadyInUse(
                        f"Document '{clash.number}' is already associated "
                        "with another customer."
                    )
                entity.validate_for_persistence()

                record.name = entity.name
                record.is_active = entity.is_active
                record.updated_at = entity.updated_at
                record.save(update_fields=["name", "is_active", "updated_at"])
                for collection in (*_COLLECTIONS, "document_claims"):
                    getattr(record, collection).all().delete()
                self._write_collections(record, entity)
        except IntegrityError as exc:
            log.warning("customer.document_conflict", race=True)
            raise DocumentAlreadyInUse(
                "A document of this customer is already used by another customer."
            ) from exc
        log.info("customer.saved", is_new=False)

    @transaction.atomic
    def delete(self, id: UUID | str) -> None:
        """Hard-delete a customer; collections cascade.

        Raises:
            CustomerNotFound: no customer with this ID.
        """
        try:
            deleted, _ = CustomerRecord.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            deleted = 0
        if not deleted:
            raise CustomerNotFound(f"Customer with ID '{id}' not found for deletion.")
        logger.info("customer.deleted", customer_id=str(id))
