import copy

import pytest

from rest_framework.test import APIClient

CUSTOMER_PAYLOAD = {
    "name": "Joao Silva",
    "emails": [{"value": "joao@x.com", "is_primary": True}],
    "phones": [{"area_code": "11", "number": "987654321", "is_primary": True}],
    "addresses": [
        {
            "street": "Rua das Flores",
            "number": "100",
            "city": "Sao Paulo",
            "state": "SP",
            "zip_code": "01000-000",
            "country": "Brasil",
            "is_primary": True,
        }
    ],
    "documents": [{"number": "598.601.842-75", "document_type": "CPF"}],
}


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def customer_payload():
    """A complete create-customer request body (fresh copy per test)."""
    return copy.deepcopy(CUSTOMER_PAYLOAD)
