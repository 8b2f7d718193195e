"""Customer aggregate root.

The aggregate owns four ordered collections of value objects (emails,
phones, addresses, documents) and is the only place they may change.
Collections are stored as tuples and every mutation builds the new tuple
first and assigns it last, so a failing call leaves the customer untouched.

Invariants held after every public call:
- no two structurally-equal elements in a collection;
- at most one ``is_primary`` element per collection;
- ``name`` has at least ``MIN_NAME_LENGTH`` characters after trimming;
- the last email, phone or address cannot be removed.

``validate_for_persistence`` adds the completeness rules checked before a
repository commits (at least one of each channel with a primary, and at
least one document).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, TypeVar
from uuid import UUID

import uuid6

from modules.customers.constants import MIN_NAME_LENGTH, NAME_MAX_LENGTH
from modules.customers.domain.value_objects import (
    Address,
    Document,
    Email,
    Phone,
    normalize_document_number,
)
from modules.customers.exceptions import (
    CustomerDataNotFound,
    CustomerInvariantViolation,
    DuplicateCustomerData,
    InvalidCustomerData,
)

T = TypeVar("T", Email, Phone, Address)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validated_name(name: Optional[str]) -> str:
    if name is None or len(name.strip()) < MIN_NAME_LENGTH:
        raise InvalidCustomerData(
            f"Customer name must have at least {MIN_NAME_LENGTH} characters."
        )
    if len(name.strip()) > NAME_MAX_LENGTH:
        raise InvalidCustomerData(
            f"Customer name must have at most {NAME_MAX_LENGTH} characters."
        )
    return name.strip()


def _promote(items: tuple[T, ...], is_target: Callable[[T], bool]) -> tuple[T, ...]:
    """Return ``items`` with the target primary and every other item secondary."""
    return tuple(item.with_primary(is_target(item)) for item in items)


def _append(items: tuple[T, ...], new_item: T) -> tuple[T, ...]:
    if new_item.is_primary:
        items = tuple(item.with_primary(False) for item in items)
    return items + (new_item,)


def _remove_at(items: tuple[T, ...], index: int) -> tuple[T, ...]:
    removed = items[index]
    remaining = items[:index] + items[index + 1 :]
    if removed.is_primary and remaining:
        remaining = (remaining[0].with_primary(True),) + remaining[1:]
    return remaining


def _find(items: Iterable[T], predicate: Callable[[T], bool]) -> Optional[int]:
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return None


class Customer:
    """Customer aggregate root.

    Build new customers with :meth:`create`; repositories reload stored
    state with :meth:`rehydrate`.  Callers never assign attributes directly.
    """

    def __init__(
        self,
        *,
        id: UUID,
        name: str,
        emails: Iterable[Email] = (),
        phones: Iterable[Phone] = (),
        addresses: Iterable[Address] = (),
        documents: Iterable[Document] = (),
        created_at: datetime,
        updated_at: datetime,
        is_active: bool = True,
    ) -> None:
        self._id = id
        self._name = name
        self._emails: tuple[Email, ...] = tuple(emails)
        self._phones: tuple[Phone, ...] = tuple(phones)
        self._addresses: tuple[Address, ...] = tuple(addresses)
        self._documents: tuple[Document, ...] = tuple(documents)
        self._created_at = created_at
        self._updated_at = updated_at
        self._is_active = is_active

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, name: str) -> Customer:
        """Create an active customer with empty collections.

        Raises:
            InvalidCustomerData: name blank or shorter than 3 characters.
        """
        now = _utcnow()
        return cls(
            id=uuid6.uuid7(),
            name=_validated_name(name),
            created_at=now,
            updated_at=now,
            is_active=True,
        )

    @classmethod
    def rehydrate(cls, **state) -> Customer:
        """Rebuild a customer from stored state without re-running factories."""
        return cls(**state)

    # ------------------------------------------------------------------
    # Read-only projection
    # ------------------------------------------------------------------

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def emails(self) -> tuple[Email, ...]:
        return self._emails

    @property
    def phones(self) -> tuple[Phone, ...]:
        return self._phones

    @property
    def addresses(self) -> tuple[Address, ...]:
        return self._addresses

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def primary_email(self) -> Optional[Email]:
        return next((e for e in self._emails if e.is_primary), None)

    @property
    def primary_phone(self) -> Optional[Phone]:
        return next((p for p in self._phones if p.is_primary), None)

    @property
    def primary_address(self) -> Optional[Address]:
        return next((a for a in self._addresses if a.is_primary), None)

    def has_document(self, number: str) -> bool:
        cleaned = normalize_document_number(number)
        return any(d.number == cleaned for d in self._documents)

    def _touch(self) -> None:
        self._updated_at = _utcnow()

    # ------------------------------------------------------------------
    # Name
    # ------------------------------------------------------------------

    def update_name(self, new_name: str) -> None:
        self._name = _validated_name(new_name)
        self._touch()

    # ------------------------------------------------------------------
    # Emails
    # ------------------------------------------------------------------

    def add_email(self, value: str, is_primary: bool = False) -> Email:
        """Append an email; a primary one demotes the current primary.

        Raises:
            InvalidCustomerData: malformed address.
            DuplicateCustomerData: address already present (case-insensitive).
        """
        email = Email.create(value, is_primary)
        if email in self._emails:
            raise DuplicateCustomerData(
                f"Email '{value}' already exists for this customer."
            )
        self._emails = _append(self._emails, email)
        self._touch()
        return email

    def remove_email(self, value: str) -> None:
        """Remove an email; if it was primary the first remaining one takes over.

        Raises:
            CustomerDataNotFound: no such email.
            CustomerInvariantViolation: it is the last email.
        """
        index = _find(self._emails, lambda e: e.matches(value))
        if index is None:
            raise CustomerDataNotFound(f"Email '{value}' not found for removal.")
        if len(self._emails) == 1:
            raise CustomerInvariantViolation(
                "Cannot remove the last email of the customer."
            )
        self._emails = _remove_at(self._emails, index)
        self._touch()

    def set_primary_email(self, value: str) -> None:
        index = _find(self._emails, lambda e: e.matches(value))
        if index is None:
            raise CustomerDataNotFound(
                f"Email '{value}' not found to be set as primary."
            )
        if self._emails[index].is_primary:
            return
        self._emails = _promote(self._emails, lambda e: e.matches(value))
        self._touch()

    # ------------------------------------------------------------------
    # Phones
    # ------------------------------------------------------------------

    def add_phone(self, area_code: str, number: str, is_primary: bool = False) -> Phone:
        phone = Phone.create(area_code, number, is_primary)
        if phone in self._phones:
            raise DuplicateCustomerData(
                f"Phone '{phone}' already exists for this customer."
            )
        self._phones = _append(self._phones, phone)
        self._touch()
        return phone

    def remove_phone(self, area_code: str, number: str) -> None:
        index = _find(self._phones, lambda p: p.matches(area_code, number))
        if index is None:
            raise CustomerDataNotFound(
                f"Phone '({area_code}) {number}' not found for removal."
            )
        if len(self._phones) == 1:
            raise CustomerInvariantViolation(
                "Cannot remove the last phone of the customer."
            )
        self._phones = _remove_at(self._phones, index)
        self._touch()

    def set_primary_phone(self, area_code: str, number: str) -> None:
        index = _find(self._phones, lambda p: p.matches(area_code, number))
        if index is None:
            raise CustomerDataNotFound(
                f"Phone '({area_code}) {number}' not found to be set as primary."
            )
        if self._phones[index].is_primary:
            return
        self._phones = _promote(self._phones, lambda p: p.matches(area_code, number))
        self._touch()

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    def add_address(
        self,
        street: str,
        number: str,
        city: str,
        state: str,
        zip_code: str,
        country: str,
        complement: Optional[str] = None,
        is_primary: bool = False,
    ) -> Address:
        address = Address.create(
            street, number, city, state, zip_code, country, complement, is_primary
        )
        if address in self._addresses:
            raise DuplicateCustomerData(
                f"Address '{address}' already exists for this customer."
            )
        self._addresses = _append(self._addresses, address)
        self._touch()
        return address

    def remove_address(self, street: str, number: str, city: str) -> None:
        index = _find(self._addresses, lambda a: a.matches(street, number, city))
        if index is None:
            raise CustomerDataNotFound(
                f"Address '{street}, {number} - {city}' not found for removal."
            )
        if len(self._addresses) == 1:
            raise CustomerInvariantViolation(
                "Cannot remove the last address of the customer."
            )
        self._addresses = _remove_at(self._addresses, index)
        self._touch()

    def set_primary_address(self, street: str, number: str, city: str) -> None:
        index = _find(self._addresses, lambda a: a.matches(street, number, city))
        if index is None:
            raise CustomerDataNotFound(
                f"Address '{street}, {number} - {city}' not found to be set as primary."
            )
        if self._addresses[index].is_primary:
            return
        # Only the first match is promoted when lookup keys collide.
        target = self._addresses[index]
        self._addresses = _promote(self._addresses, lambda a: a is target)
        self._touch()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def add_document(
        self,
        number: str,
        document_type: str,
        verify_checksum: bool = False,
    ) -> Document:
        document = Document.create(number, document_type, verify_checksum)
        if document in self._documents:
            raise DuplicateCustomerData(
                f"Document '{document.number}' of type "
                f"'{document.document_type}' already exists for this customer."
            )
        self._documents = self._documents + (document,)
        self._touch()
        return document

    def remove_document(self, number: str) -> None:
        """Remove the first document with this number (documents may be emptied)."""
        cleaned = normalize_document_number(number)
        index = _find(self._documents, lambda d: d.number == cleaned)
        if index is None:
            raise CustomerDataNotFound(f"Document '{number}' not found for removal.")
        self._documents = self._documents[:index] + self._documents[index + 1 :]
        self._touch()

    # ------------------------------------------------------------------
    # Lifecycle (Active <-> Inactive)
    # ------------------------------------------------------------------

    def activate(self) -> None:
        if self._is_active:
            raise CustomerInvariantViolation("Customer is already active.")
        self._is_active = True
        self._touch()

    def deactivate(self) -> None:
        if not self._is_active:
            raise CustomerInvariantViolation("Customer is already inactive.")
        self._is_active = False
        self._touch()

    # ------------------------------------------------------------------
    # Pre-persistence check
    # ------------------------------------------------------------------

    def validate_for_persistence(self) -> None:
        """Raise on the first missing piece; order is fixed for stable messages.

        Raises:
            CustomerInvariantViolation
        """
        checks = (
            (self._emails, "Customer must have at least one email."),
            (self.primary_email, "Customer must have a primary email."),
            (self._phones, "Customer must have at least one phone."),
            (self.primary_phone, "Customer must have a primary phone."),
            (self._addresses, "Customer must have at least one address."),
            (self.primary_address, "Customer must have a primary address."),
            (self._documents, "Customer must have at least one document."),
        )
        for present, message in checks:
            if not present:
                raise CustomerInvariantViolation(message)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Customer):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Customer(id={self._id!s}, name={self._name!r}, active={self._is_active})"
