"""Relational storage for the Customer aggregate.

One row per customer plus one table per embedded collection.  These
records are a persistence detail of ``CustomerDjangoRepository``: nothing
outside the repository reads or writes them, and every business rule
lives in ``modules.customers.domain``.

Child rows keep a ``position`` column so collection order survives a
round-trip.  ``CustomerDocumentClaim.number`` is UNIQUE: the database is
the final arbiter of cross-customer document uniqueness.  Column sizes
come from ``constants`` so the value objects reject what would not fit.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.customers.constants import (
    ADDRESS_MAX_LENGTHS,
    AREA_CODE_LENGTH,
    DOCUMENT_NUMBER_MAX_LENGTH,
    DOCUMENT_TYPE_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_NUMBER_MAX_LENGTH,
)


class CustomerRecord(BaseModel):
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "customers"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["is_active"], name="customers_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class CustomerEmailRecord(models.Model):
    customer = models.ForeignKey(
        CustomerRecord, on_delete=models.CASCADE, related_name="emails"
    )
    position = models.PositiveSmallIntegerField()
    value = models.CharField(max_length=EMAIL_MAX_LENGTH)
    is_primary = models.BooleanField(default=False)

    class Meta:
        db_table = "customer_emails"
        ordering = ["position"]


class CustomerPhoneRecord(models.Model):
    customer = models.ForeignKey(
        CustomerRecord, on_delete=models.CASCADE, related_name="phones"
    )
    position = models.PositiveSmallIntegerField()
    area_code = models.CharField(max_length=AREA_CODE_LENGTH)
    number = models.CharField(max_length=PHONE_NUMBER_MAX_LENGTH)
    is_primary = models.BooleanField(default=False)

    class Meta:
        db_table = "customer_phones"
        ordering = ["position"]


class CustomerAddressRecord(models.Model):
    customer = models.ForeignKey(
        CustomerRecord, on_delete=models.CASCADE, related_name="addresses"
    )
    position = models.PositiveSmallIntegerField()
    street = models.CharField(max_length=ADDRESS_MAX_LENGTHS["street"])
    number = models.CharField(max_length=ADDRESS_MAX_LENGTHS["number"])
    complement = models.CharField(  # noqa: DJ01
        max_length=ADDRESS_MAX_LENGTHS["complement"], null=True, blank=True
    )
    city = models.CharField(max_length=ADDRESS_MAX_LENGTHS["city"])
    state = models.CharField(max_length=ADDRESS_MAX_LENGTHS["state"])
    zip_code = models.CharField(max_length=ADDRESS_MAX_LENGTHS["zip_code"])
    country = models.CharField(max_length=ADDRESS_MAX_LENGTHS["country"])
    is_primary = models.BooleanField(default=False)

    class Meta:
        db_table = "customer_addresses"
        ordering = ["position"]


class CustomerDocumentRecord(models.Model):
    customer = models.ForeignKey(
        CustomerRecord, on_delete=models.CASCADE, related_name="documents"
    )
    position = models.PositiveSmallIntegerField()
    number = models.CharField(max_length=DOCUMENT_NUMBER_MAX_LENGTH, db_index=True)
    document_type = models.CharField(max_length=DOCUMENT_TYPE_MAX_LENGTH)

    class Meta:
        db_table = "customer_documents"
        ordering = ["position"]

    def __str__(self) -> str:
        # Masked: only the last four digits are shown.
        suffix = self.number[-4:] if self.number else "????"
        return f"{self.document_type}: ***{suffix}"


class CustomerDocumentClaim(models.Model):
    """One row per distinct document number a customer holds.

    A customer may carry the same number under two types (RG and CNH), so
    the document rows cannot be unique; the claim is, and it is what stops
    two customers from holding the same number.
    """

    customer = models.ForeignKey(
        CustomerRecord, on_delete=models.CASCADE, related_name="document_claims"
    )
    number = models.CharField(max_length=DOCUMENT_NUMBER_MAX_LENGTH, unique=True)

    class Meta:
        db_table = "customer_document_claims"
