"""Unit tests for InMemoryCustomerRepository.

Covers:
- add / update / delete contracts and their error messages.
- Cross-customer document uniqueness (normalized numbers).
- Snapshot isolation of returned customers.
- Concurrent adds of the same document: exactly one wins.
"""

from __future__ import annotations

import threading
import uuid

import pytest

from modules.customers.exceptions import (
    CustomerInvariantViolation,
    CustomerNotFound,
    DocumentAlreadyInUse,
    DuplicateCustomerData,
)
from modules.customers.domain import Customer
from modules.customers.repositories import ICustomerRepository, InMemoryCustomerRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


class TestInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, ICustomerRepository)


# ===========================================================================
# add
# ===========================================================================


class TestAdd:
    def test_add_and_get(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        stored = repo.get_by_id(customer.id)
        assert stored == customer
        assert stored.name == "Joao Silva"
        assert repo.customer_exists(customer.id)
        assert repo.customer_exists(str(customer.id))

    def test_same_document_on_another_customer_conflicts(self, repo, make_customer):
        first = make_customer(document="111", document_type="RG")
        repo.add(first)
        second = make_customer(name="Maria Souza", document="1-1-1", document_type="RG")

        with pytest.raises(DocumentAlreadyInUse) as exc_info:
            repo.add(second)

        assert str(exc_info.value) == "A customer with document '111' already exists."
        assert [c.id for c in repo.get_all()] == [first.id]
        assert not repo.customer_exists(second.id)

    def test_incomplete_customer_rejected(self, repo):
        customer = Customer.create("Joao Silva")
        customer.add_email("joao@x.com", True)
        with pytest.raises(
            CustomerInvariantViolation, match="Customer must have at least one phone."
        ):
            repo.add(customer)
        assert repo.get_all() == []

    def test_same_number_under_two_types_on_one_customer(self, repo, make_customer):
        customer = make_customer(document="12345678", document_type="RG")
        customer.add_document("12345678", "CNH")
        repo.add(customer)
        assert len(repo.get_by_id(customer.id).documents) == 2

    def test_duplicate_id_rejected(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        with pytest.raises(DuplicateCustomerData) as exc_info:
            repo.add(customer)
        assert str(exc_info.value) == f"Customer with ID '{customer.id}' already exists."


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_by_id_unknown_or_malformed(self, repo):
        assert repo.get_by_id(uuid.uuid4()) is None
        assert repo.get_by_id("not-a-uuid") is None
        assert repo.customer_exists("not-a-uuid") is False

    def test_get_by_document_accepts_formatted_number(self, repo, make_customer):
        customer = make_customer(document="598.601.842-75")
        repo.add(customer)
        assert repo.get_by_document("59860184275") == customer
        assert repo.document_exists("598.601.842-75")
        assert repo.get_by_document("00000000000") is None
        assert repo.document_exists("") is False

    def test_returned_customer_is_a_snapshot(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)

        customer.update_name("Changed After Add")
        loaded = repo.get_by_id(customer.id)
        assert loaded.name == "Joao Silva"

        loaded.add_email("other@x.com")
        assert len(repo.get_by_id(customer.id).emails) == 1


# ===========================================================================
# update
# ===========================================================================


class TestUpdate:
    def test_update_persists_changes(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        loaded = repo.get_by_id(customer.id)
        loaded.add_email("second@x.com", True)
        repo.update(loaded)

        stored = repo.get_by_id(customer.id)
        assert stored.primary_email.value == "second@x.com"
        assert len(stored.emails) == 2

    def test_update_unknown_customer(self, repo, make_customer):
        customer = make_customer()
        with pytest.raises(CustomerNotFound) as exc_info:
            repo.update(customer)
        assert str(exc_info.value) == f"Customer with ID '{customer.id}' not found for update."

    def test_update_keeping_own_document_is_allowed(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        customer.update_name("Joao Pereira")
        repo.update(customer)
        assert repo.get_by_id(customer.id).name == "Joao Pereira"

    def test_update_with_document_of_another_customer(self, repo, make_customer):
        first = make_customer(document="11111111111")
        second = make_customer(name="Maria Souza", document="22222222222")
        repo.add(first)
        repo.add(second)

        second.add_document("111.111.111-11", "CPF")
        with pytest.raises(DocumentAlreadyInUse) as exc_info:
            repo.update(second)

        assert str(exc_info.value) == (
            "Document '11111111111' is already associated with another customer."
        )
        assert len(repo.get_by_id(second.id).documents) == 1

    def test_update_revalidates(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        customer.remove_document("12345678901")
        with pytest.raises(CustomerInvariantViolation):
            repo.update(customer)
        assert len(repo.get_by_id(customer.id).documents) == 1


# ===========================================================================
# delete
# ===========================================================================


class TestDelete:
    def test_delete(self, repo, make_customer):
        customer = make_customer()
        repo.add(customer)
        repo.delete(customer.id)
        assert repo.get_by_id(customer.id) is None
        assert repo.document_exists("12345678901") is False

    def test_delete_unknown_is_strict(self, repo):
        missing = uuid.uuid4()
        with pytest.raises(CustomerNotFound) as exc_info:
            repo.delete(missing)
        assert str(exc_info.value) == f"Customer with ID '{missing}' not found for deletion."


# ===========================================================================
# Concurrency
# ===========================================================================


class TestConcurrentAdds:
    def test_only_one_add_wins_per_document(self, repo, make_customer):
        workers = 8
        customers = [
            make_customer(name=f"Customer {i}", email=f"c{i}@x.com", document="98765432100")
            for i in range(workers)
        ]
        barrier = threading.Barrier(workers)
        results: list[str] = []
        results_lock = threading.Lock()

        def attempt(customer):
            barrier.wait()
            try:
                repo.add(customer)
                outcome = "ok"
            except DocumentAlreadyInUse:
                outcome = "conflict"
            with results_lock:
                results.append(outcome)

        threads = [threading.Thread(target=attempt, args=(c,)) for c in customers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert sorted(results) == ["conflict"] * (workers - 1) + ["ok"]
        assert len(repo.get_all()) == 1
