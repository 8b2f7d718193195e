"""Integration tests for Customer API endpoints.

Covers:
- CRUD operations via /api/v1/customers/.
- Collection and lifecycle actions.
- Domain exception mapping (400, 404, 409, 422) with ``{"detail": ...}``.
"""

from __future__ import annotations

import uuid

import pytest

from modules.customers.models import CustomerRecord

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/customers/"
VALID_CPF = "59860184275"
VALID_CPF_2 = "82382537098"


def _url(customer_id, suffix: str = "") -> str:
    return f"{BASE_URL}{customer_id}/{suffix}"


@pytest.fixture()
def created(api_client, customer_payload):
    """A customer created through the API; returns the response body."""
    response = api_client.post(BASE_URL, customer_payload, format="json")
    assert response.status_code == 201, response.content
    return response.json()


# ===========================================================================
# Create / read
# ===========================================================================


class TestCustomerCreate:
    def test_create_returns_projection(self, created):
        assert created["name"] == "Joao Silva"
        assert created["is_active"] is True
        assert created["emails"] == [{"value": "joao@x.com", "is_primary": True}]
        assert created["phones"] == [
            {"area_code": "11", "number": "987654321", "is_primary": True}
        ]
        assert created["addresses"][0]["complement"] is None
        assert created["documents"] == [{"number": VALID_CPF, "document_type": "CPF"}]
        assert uuid.UUID(created["id"])
        assert "created_at" in created and "updated_at" in created

    def test_short_name_returns_400(self, api_client, customer_payload):
        customer_payload["name"] = "Jo"
        response = api_client.post(BASE_URL, customer_payload, format="json")
        assert response.status_code == 400
        assert response.json() == {"detail": "Customer name must have at least 3 characters."}

    def test_missing_name_returns_400(self, api_client, customer_payload):
        del customer_payload["name"]
        response = api_client.post(BASE_URL, customer_payload, format="json")
        assert response.status_code == 400
        assert "detail" in response.json()

    def test_malformed_json_returns_400(self, api_client):
        response = api_client.post(BASE_URL, data="{", content_type="application/json")
        assert response.status_code == 400

    def test_duplicate_email_in_payload_returns_409(self, api_client, customer_payload):
        customer_payload["emails"].append({"value": "JOAO@x.com"})
        response = api_client.post(BASE_URL, customer_payload, format="json")
        assert response.status_code == 409
        assert response.json()["detail"] == "Email 'JOAO@x.com' already exists for this customer."

    def test_incomplete_customer_returns_422(self, api_client, customer_payload):
        customer_payload["documents"] = []
        response = api_client.post(BASE_URL, customer_payload, format="json")
        assert response.status_code == 422
        assert response.json() == {"detail": "Customer must have at least one document."}
        assert CustomerRecord.objects.count() == 0

    def test_document_of_another_customer_returns_409(self, api_client, created, customer_payload):
        customer_payload["name"] = "Maria Souza"
        response = api_client.post(BASE_URL, customer_payload, format="json")
        assert response.status_code == 409
        assert response.json()["detail"] == f"A customer with document '{VALID_CPF}' already exists."
        assert CustomerRecord.objects.count() == 1


class TestCustomerRead:
    def test_list_is_paginated(self, api_client, created):
        response = api_client.get(BASE_URL)
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["id"] == created["id"]

    def test_retrieve(self, api_client, created):
        response = api_client.get(_url(created["id"]))
        assert response.status_code == 200
        assert response.json()["name"] == "Joao Silva"

    def test_retrieve_unknown_returns_404(self, api_client):
        response = api_client.get(_url(uuid.uuid4()))
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_retrieve_malformed_id_returns_404(self, api_client):
        response = api_client.get(_url("not-a-uuid"))
        assert response.status_code == 404

    def test_by_document(self, api_client, created):
        response = api_client.get(f"{BASE_URL}by-document/{VALID_CPF}/")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_by_unknown_document_returns_404(self, api_client, created):
        response = api_client.get(f"{BASE_URL}by-document/{VALID_CPF_2}/")
        assert response.status_code == 404
        assert response.json() == {"detail": "No customer holds this document."}


# ===========================================================================
# Update / delete / lifecycle
# ===========================================================================


class TestCustomerUpdate:
    def test_rename(self, api_client, created):
        response = api_client.put(_url(created["id"]), {"name": "Joao Pereira"}, format="json")
        assert response.status_code == 200
        assert response.json()["name"] == "Joao Pereira"

    def test_partial_rename(self, api_client, created):
        response = api_client.patch(_url(created["id"]), {"name": "Joao Pereira"}, format="json")
        assert response.status_code == 200

    def test_rename_unknown_returns_404(self, api_client):
        response = api_client.put(_url(uuid.uuid4()), {"name": "Joao Pereira"}, format="json")
        assert response.status_code == 404

    def test_delete(self, api_client, created):
        response = api_client.delete(_url(created["id"]))
        assert response.status_code == 204
        assert api_client.get(_url(created["id"])).status_code == 404

    def test_delete_unknown_returns_404(self, api_client):
        response = api_client.delete(_url(uuid.uuid4()))
        assert response.status_code == 404

    def test_lifecycle(self, api_client, created):
        response = api_client.post(_url(created["id"], "deactivate/"))
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = api_client.post(_url(created["id"], "deactivate/"))
        assert response.status_code == 422
        assert response.json() == {"detail": "Customer is already inactive."}

        response = api_client.post(_url(created["id"], "activate/"))
        assert response.json()["is_active"] is True


# ===========================================================================
# Collections
# ===========================================================================


class TestCustomerCollections:
    def test_email_flow(self, api_client, created):
        url = _url(created["id"], "emails/")
        response = api_client.post(url, {"value": "b@x.com", "is_primary": True}, format="json")
        assert response.status_code == 200
        assert response.json()["emails"] == [
            {"value": "joao@x.com", "is_primary": False},
            {"value": "b@x.com", "is_primary": True},
        ]

        response = api_client.post(
            _url(created["id"], "emails/remove/"), {"value": "b@x.com"}, format="json"
        )
        assert response.json()["emails"] == [{"value": "joao@x.com", "is_primary": True}]

        response = api_client.post(
            _url(created["id"], "emails/remove/"), {"value": "joao@x.com"}, format="json"
        )
        assert response.status_code == 422
        assert response.json() == {"detail": "Cannot remove the last email of the customer."}

    def test_invalid_email_returns_400(self, api_client, created):
        response = api_client.post(
            _url(created["id"], "emails/"), {"value": "bad-email"}, format="json"
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "Email 'bad-email' has an invalid format."}

    def test_set_primary_missing_email_returns_404(self, api_client, created):
        response = api_client.post(
            _url(created["id"], "emails/primary/"), {"value": "z@x.com"}, format="json"
        )
        assert response.status_code == 404

    def test_phone_flow(self, api_client, created):
        api_client.post(
            _url(created["id"], "phones/"),
            {"area_code": "21", "number": "32345678"},
            format="json",
        )
        response = api_client.post(
            _url(created["id"], "phones/primary/"),
            {"area_code": "21", "number": "32345678"},
            format="json",
        )
        assert response.status_code == 200
        assert [p["is_primary"] for p in response.json()["phones"]] == [False, True]

    def test_address_flow(self, api_client, created, customer_payload):
        other = {**customer_payload["addresses"][0], "street": "Avenida Paulista", "is_primary": False}
        response = api_client.post(_url(created["id"], "addresses/"), other, format="json")
        assert response.status_code == 200

        key = {"street": "Rua das Flores", "number": "100", "city": "Sao Paulo"}
        response = api_client.post(_url(created["id"], "addresses/remove/"), key, format="json")
        assert response.status_code == 200
        addresses = response.json()["addresses"]
        assert [(a["street"], a["is_primary"]) for a in addresses] == [("Avenida Paulista", True)]

    def test_duplicate_address_returns_409(self, api_client, created, customer_payload):
        response = api_client.post(
            _url(created["id"], "addresses/"), customer_payload["addresses"][0], format="json"
        )
        assert response.status_code == 409

    def test_document_flow(self, api_client, created):
        response = api_client.post(
            _url(created["id"], "documents/"),
            {"number": "11.222.333/0001-81", "document_type": "cnpj"},
            format="json",
        )
        assert response.status_code == 200
        assert {"number": "11222333000181", "document_type": "CNPJ"} in response.json()["documents"]

        response = api_client.post(
            _url(created["id"], "documents/remove/"), {"number": VALID_CPF}, format="json"
        )
        assert response.json()["documents"] == [
            {"number": "11222333000181", "document_type": "CNPJ"}
        ]

    def test_removing_only_document_returns_422(self, api_client, created):
        response = api_client.post(
            _url(created["id"], "documents/remove/"), {"number": VALID_CPF}, format="json"
        )
        assert response.status_code == 422
        assert response.json() == {"detail": "Customer must have at least one document."}

    def test_document_of_another_customer_returns_409(self, api_client, created, customer_payload):
        customer_payload["name"] = "Maria Souza"
        customer_payload["documents"] = [{"number": VALID_CPF_2, "document_type": "CPF"}]
        other = api_client.post(BASE_URL, customer_payload, format="json").json()

        response = api_client.post(
            _url(other["id"], "documents/"),
            {"number": VALID_CPF, "document_type": "CPF"},
            format="json",
        )
        assert response.status_code == 409
        assert response.json() == {
            "detail": f"Document '{VALID_CPF}' is already associated with another customer."
        }


class TestSchema:
    def test_openapi_schema_is_served(self, api_client):
        response = api_client.get("/api/schema/")
        assert response.status_code == 200
