"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes
(see ``ERROR_STATUS``); the view never swallows generic exceptions.
Every error body has the shape ``{"detail": "<message>"}``.
"""

from __future__ import annotations

from typing import Callable, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.domain import Customer
from modules.customers.dtos import (
    AddressDTO,
    AddressKeyDTO,
    CreateCustomerDTO,
    DocumentDTO,
    DocumentKeyDTO,
    EmailDTO,
    EmailKeyDTO,
    PhoneDTO,
    PhoneKeyDTO,
    RenameCustomerDTO,
)
from modules.customers.exceptions import (
    CustomerDataNotFound,
    CustomerDomainError,
    CustomerInvariantViolation,
    DocumentAlreadyInUse,
    DuplicateCustomerData,
    InvalidCustomerData,
)
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService

ERROR_STATUS: tuple[tuple[Type[CustomerDomainError], int], ...] = (
    (InvalidCustomerData, status.HTTP_400_BAD_REQUEST),
    (CustomerDataNotFound, status.HTTP_404_NOT_FOUND),
    (DuplicateCustomerData, status.HTTP_409_CONFLICT),
    (DocumentAlreadyInUse, status.HTTP_409_CONFLICT),
    (CustomerInvariantViolation, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def domain_error_response(exc: CustomerDomainError) -> Response:
    for error_class, code in ERROR_STATUS:
        if isinstance(exc, error_class):
            return Response({"detail": str(exc)}, status=code)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class CustomerViewSet(GenericViewSet):
    """ViewSet for the Customer aggregate.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def _execute(
        self,
        request: Request,
        command: Callable[[Optional[BaseModel]], Customer],
        dto_class: Optional[Type[BaseModel]] = None,
        success_status: int = status.HTTP_200_OK,
    ) -> Response:
        """Parse the body into ``dto_class``, run ``command``, render the customer."""
        try:
            dto = dto_class.model_validate(request.data) if dto_class else None
            customer = command(dto)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except CustomerDomainError as exc:
            return domain_error_response(exc)
        return Response(CustomerSerializer(customer).data, status=success_status)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        customers = self._service.list_customers()
        page = self.paginate_queryset(customers)
        if page is not None:
            return self.get_paginated_response(CustomerSerializer(page, many=True).data)
        return Response(CustomerSerializer(customers, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        return self._execute(request, lambda _: self._service.get_customer(pk))

    @action(detail=False, methods=["get"], url_path=r"by-document/(?P<number>[^/]+)")
    def by_document(self, request: Request, number: str | None = None) -> Response:
        """GET /api/v1/customers/by-document/{number}/"""
        return self._execute(request, lambda _: self._service.find_by_document(number))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        return self._execute(
            request,
            self._service.create_customer,
            CreateCustomerDTO,
            success_status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/ renames the customer."""
        return self._execute(
            request, lambda dto: self._service.rename_customer(pk, dto), RenameCustomerDTO
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk)
        except CustomerDomainError as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def activate(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(request, lambda _: self._service.activate_customer(pk))

    @action(detail=True, methods=["post"])
    def deactivate(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(request, lambda _: self._service.deactivate_customer(pk))

    # ------------------------------------------------------------------
    # Emails
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def emails(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda dto: self._service.add_email(pk, dto), EmailDTO
        )

    @action(detail=True, methods=["post"], url_path="emails/remove")
    def remove_email(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.remove_email(pk, key), EmailKeyDTO
        )

    @action(detail=True, methods=["post"], url_path="emails/primary")
    def set_primary_email(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.set_primary_email(pk, key), EmailKeyDTO
        )

    # ------------------------------------------------------------------
    # Phones
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def phones(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda dto: self._service.add_phone(pk, dto), PhoneDTO
        )

    @action(detail=True, methods=["post"], url_path="phones/remove")
    def remove_phone(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.remove_phone(pk, key), PhoneKeyDTO
        )

    @action(detail=True, methods=["post"], url_path="phones/primary")
    def set_primary_phone(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.set_primary_phone(pk, key), PhoneKeyDTO
        )

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def addresses(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda dto: self._service.add_address(pk, dto), AddressDTO
        )

    @action(detail=True, methods=["post"], url_path="addresses/remove")
    def remove_address(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.remove_address(pk, key), AddressKeyDTO
        )

    @action(detail=True, methods=["post"], url_path="addresses/primary")
    def set_primary_address(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request,
            lambda key: self._service.set_primary_address(pk, key),
            AddressKeyDTO,
        )

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def documents(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda dto: self._service.add_document(pk, dto), DocumentDTO
        )

    @action(detail=True, methods=["post"], url_path="documents/remove")
    def remove_document(self, request: Request, pk: str | None = None) -> Response:
        return self._execute(
            request, lambda key: self._service.remove_document(pk, key), DocumentKeyDTO
        )
