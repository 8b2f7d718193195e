"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

DTOs only shape the input (types, presence).  They do **not** decide
whether a value is acceptable: the aggregate and its value objects
re-validate every field, so a DTO built by hand cannot sneak a bad
email or phone past the domain.

- ``EmailDTO`` / ``PhoneDTO`` / ``AddressDTO`` / ``DocumentDTO``: one
  embedded value each.
- ``CreateCustomerDTO``: name plus the initial collections.
- ``RenameCustomerDTO``: input for the name update.
- ``*KeyDTO``: identify an existing value for removal / primary selection.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FrozenDTO(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Embedded values
# ---------------------------------------------------------------------------


class EmailDTO(_FrozenDTO):
    value: str
    is_primary: bool = False


class PhoneDTO(_FrozenDTO):
    area_code: str
    number: str
    is_primary: bool = False


class AddressDTO(_FrozenDTO):
    street: str
    number: str
    city: str
    state: str
    zip_code: str
    country: str
    complement: Optional[str] = None
    is_primary: bool = False


class DocumentDTO(_FrozenDTO):
    """Document input; ``number`` may be formatted (``123.456.789-01``)."""

    number: str
    document_type: str

    @field_validator("document_type", mode="before")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Accept ``cpf`` / `` CNPJ `` as the canonical upper-case type."""
        if not isinstance(v, str):
            return v
        return v.strip().upper()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class CreateCustomerDTO(_FrozenDTO):
    """Immutable DTO for customer creation requests.

    The collections may be empty here; the repository rejects a customer
    that is incomplete when it is persisted.
    """

    name: str
    emails: List[EmailDTO] = Field(default_factory=list)
    phones: List[PhoneDTO] = Field(default_factory=list)
    addresses: List[AddressDTO] = Field(default_factory=list)
    documents: List[DocumentDTO] = Field(default_factory=list)


class RenameCustomerDTO(_FrozenDTO):
    name: str


# ---------------------------------------------------------------------------
# Look-up keys
# ---------------------------------------------------------------------------


class EmailKeyDTO(_FrozenDTO):
    value: str


class PhoneKeyDTO(_FrozenDTO):
    area_code: str
    number: str


class AddressKeyDTO(_FrozenDTO):
    street: str
    number: str
    city: str


class DocumentKeyDTO(_FrozenDTO):
    number: str
