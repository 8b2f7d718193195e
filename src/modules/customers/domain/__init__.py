"""Framework-agnostic Customer domain model (aggregate + value objects)."""

from modules.customers.domain.customer import Customer
from modules.customers.domain.value_objects import (
    Address,
    Document,
    Email,
    Phone,
    normalize_document_number,
)

__all__ = [
    "Address",
    "Customer",
    "Document",
    "Email",
    "Phone",
    "normalize_document_number",
]
