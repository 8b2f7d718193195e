"""Value objects embedded in the Customer aggregate.

Each type is an immutable dataclass built through a validating ``create``
factory.  Equality is structural and deliberately ignores the ``is_primary``
flag: two emails with the same address are the same email whether or not
one of them is the primary one.  Toggling the flag returns a new instance
(``with_primary``), so collections are rebuilt rather than mutated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional

from validate_docbr import CNPJ, CPF

from modules.customers.constants import (
    ADDRESS_MAX_LENGTHS,
    AREA_CODE_LENGTH,
    DOCUMENT_LENGTHS,
    DOCUMENT_NUMBER_MAX_LENGTH,
    DOCUMENT_TYPE_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    EMAIL_PATTERN,
    PHONE_NUMBER_MAX_LENGTH,
    PHONE_NUMBER_MIN_LENGTH,
    DocumentType,
)
from modules.customers.exceptions import InvalidCustomerData

_EMAIL_RE = re.compile(EMAIL_PATTERN, re.IGNORECASE)
# ASCII only: str.isdigit and \d also accept other scripts' digits.
_DIGITS_RE = re.compile(r"[0-9]+")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def normalize_document_number(value: str) -> str:
    """Strip everything but the ASCII digits 0-9 from a document string."""
    return re.sub(r"[^0-9]", "", value or "")


class ValueObject:
    """Structural equality over ``_equality_components``."""

    __slots__ = ()

    def _equality_components(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._equality_components() == other._equality_components()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._equality_components()))


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Email(ValueObject):
    value: str
    is_primary: bool = False

    @classmethod
    def create(cls, value: str, is_primary: bool = False) -> Email:
        if _is_blank(value):
            raise InvalidCustomerData("Email address must not be empty.")
        if len(value) > EMAIL_MAX_LENGTH:
            raise InvalidCustomerData(
                f"Email must have at most {EMAIL_MAX_LENGTH} characters."
            )
        if not _EMAIL_RE.match(value):
            raise InvalidCustomerData(f"Email '{value}' has an invalid format.")
        return cls(value=value, is_primary=is_primary)

    def with_primary(self, is_primary: bool) -> Email:
        return replace(self, is_primary=is_primary)

    def matches(self, value: str) -> bool:
        """Case-insensitive comparison against a raw address."""
        return self.value.lower() == (value or "").lower()

    def _equality_components(self) -> tuple:
        return (self.value.lower(),)

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Phone
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Phone(ValueObject):
    area_code: str
    number: str
    is_primary: bool = False

    @classmethod
    def create(cls, area_code: str, number: str, is_primary: bool = False) -> Phone:
        if _is_blank(area_code):
            raise InvalidCustomerData("Area code must not be empty.")
        if len(area_code) != AREA_CODE_LENGTH or not _DIGITS_RE.fullmatch(area_code):
            raise InvalidCustomerData(
                f"Area code '{area_code}' must have exactly "
                f"{AREA_CODE_LENGTH} numeric digits."
            )
        if _is_blank(number):
            raise InvalidCustomerData("Phone number must not be empty.")
        if (
            not PHONE_NUMBER_MIN_LENGTH <= len(number) <= PHONE_NUMBER_MAX_LENGTH
            or not _DIGITS_RE.fullmatch(number)
        ):
            raise InvalidCustomerData(
                f"Phone number '{number}' must have between "
                f"{PHONE_NUMBER_MIN_LENGTH} and {PHONE_NUMBER_MAX_LENGTH} numeric digits."
            )
        return cls(area_code=area_code, number=number, is_primary=is_primary)

    def with_primary(self, is_primary: bool) -> Phone:
        return replace(self, is_primary=is_primary)

    def matches(self, area_code: str, number: str) -> bool:
        return self.area_code == area_code and self.number == number

    def _equality_components(self) -> tuple:
        return (self.area_code, self.number)

    def __str__(self) -> str:
        return f"({self.area_code}) {self.number}"


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Address(ValueObject):
    """Postal address.

    ``complement`` and ``is_primary`` do not take part in equality: the same
    street/number/city/state/zip/country is one address.
    """

    street: str
    number: str
    city: str
    state: str
    zip_code: str
    country: str
    complement: Optional[str] = None
    is_primary: bool = False

    @classmethod
    def create(
        cls,
        street: str,
        number: str,
        city: str,
        state: str,
        zip_code: str,
        country: str,
        complement: Optional[str] = None,
        is_primary: bool = False,
    ) -> Address:
        required = (
            (street, "Street must not be empty."),
            (number, "Address number must not be empty."),
            (city, "City must not be empty."),
            (state, "State must not be empty."),
            (zip_code, "Zip code must not be empty."),
            (country, "Country must not be empty."),
        )
        for value, message in required:
            if _is_blank(value):
                raise InvalidCustomerData(message)
        lengths = {
            "street": street,
            "number": number,
            "complement": complement or "",
            "city": city,
            "state": state,
            "zip_code": zip_code,
            "country": country,
        }
        for field, value in lengths.items():
            limit = ADDRESS_MAX_LENGTHS[field]
            if len(value) > limit:
                raise InvalidCustomerData(
                    f"Address {field} must have at most {limit} characters."
                )
        return cls(
            street=street,
            number=number,
            city=city,
            state=state,
            zip_code=zip_code,
            country=country,
            complement=complement or None,
            is_primary=is_primary,
        )

    def with_primary(self, is_primary: bool) -> Address:
        return replace(self, is_primary=is_primary)

    def matches(self, street: str, number: str, city: str) -> bool:
        """Lookup key used by remove/set-primary, compared case-insensitively."""
        return (
            self.street.lower() == (street or "").lower()
            and self.number.lower() == (number or "").lower()
            and self.city.lower() == (city or "").lower()
        )

    def _equality_components(self) -> tuple:
        return (
            self.street,
            self.number,
            self.city,
            self.state,
            self.zip_code,
            self.country,
        )

    def __str__(self) -> str:
        return f"{self.street}, {self.number} - {self.city}/{self.state}"


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Document(ValueObject):
    """Identification document; ``number`` holds digits only."""

    number: str
    document_type: str

    @classmethod
    def create(
        cls,
        number: str,
        document_type: str,
        verify_checksum: bool = False,
    ) -> Document:
        """Build a document from raw (possibly formatted) input.

        CPF and CNPJ numbers must have 11 and 14 digits respectively.  Check
        digits are only verified when ``verify_checksum`` is set; other
        document types skip both checks.
        """
        if _is_blank(number):
            raise InvalidCustomerData("Document number must not be empty.")
        if _is_blank(document_type):
            raise InvalidCustomerData("Document type must not be empty.")
        if len(document_type) > DOCUMENT_TYPE_MAX_LENGTH:
            raise InvalidCustomerData(
                f"Document type must have at most {DOCUMENT_TYPE_MAX_LENGTH} characters."
            )

        cleaned = normalize_document_number(number)
        if not cleaned:
            raise InvalidCustomerData(
                f"Document number '{number}' must contain digits."
            )
        if len(cleaned) > DOCUMENT_NUMBER_MAX_LENGTH:
            raise InvalidCustomerData(
                f"Document number must have at most {DOCUMENT_NUMBER_MAX_LENGTH} digits."
            )

        expected_length = DOCUMENT_LENGTHS.get(document_type)
        if expected_length is not None:
            if len(cleaned) != expected_length:
                raise InvalidCustomerData(f"{document_type} '{number}' is invalid.")
            if verify_checksum and not cls._checksum_ok(cleaned, document_type):
                raise InvalidCustomerData(f"{document_type} '{number}' is invalid.")

        return cls(number=cleaned, document_type=document_type)

    @staticmethod
    def _checksum_ok(digits: str, document_type: str) -> bool:
        validator = CPF() if document_type == DocumentType.CPF else CNPJ()
        return validator.validate(digits)

    def _equality_components(self) -> tuple:
        return (self.number, self.document_type)

    def __str__(self) -> str:
        return f"{self.document_type}: {self.number}"
