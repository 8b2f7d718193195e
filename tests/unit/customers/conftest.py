from __future__ import annotations

import pytest

from modules.customers.domain import Customer

ADDRESS = {
    "street": "Rua das Flores",
    "number": "100",
    "city": "Sao Paulo",
    "state": "SP",
    "zip_code": "01000-000",
    "country": "Brasil",
}


@pytest.fixture()
def make_customer():
    """Factory for customers that pass ``validate_for_persistence``."""

    def _make(name: str = "Joao Silva", document: str = "12345678901", **kwargs) -> Customer:
        customer = Customer.create(name)
        customer.add_email(kwargs.get("email", "joao@x.com"), True)
        customer.add_phone("11", kwargs.get("phone", "987654321"), True)
        customer.add_address(**ADDRESS, is_primary=True)
        customer.add_document(document, kwargs.get("document_type", "CPF"))
        return customer

    return _make
