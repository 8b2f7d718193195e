"""Customer DRF serializers for API output.

The serializers operate at the Interface layer (API Views) and only
render the aggregate's read-only projection.  Input goes through the
Pydantic DTOs in ``dtos.py`` and is validated again by the domain.
"""

from __future__ import annotations

from rest_framework import serializers


class EmailSerializer(serializers.Serializer):
    value = serializers.CharField(read_only=True)
    is_primary = serializers.BooleanField(read_only=True)


class PhoneSerializer(serializers.Serializer):
    area_code = serializers.CharField(read_only=True)
    number = serializers.CharField(read_only=True)
    is_primary = serializers.BooleanField(read_only=True)


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(read_only=True)
    number = serializers.CharField(read_only=True)
    complement = serializers.CharField(read_only=True, allow_null=True)
    city = serializers.CharField(read_only=True)
    state = serializers.CharField(read_only=True)
    zip_code = serializers.CharField(read_only=True)
    country = serializers.CharField(read_only=True)
    is_primary = serializers.BooleanField(read_only=True)


class DocumentSerializer(serializers.Serializer):
    number = serializers.CharField(read_only=True)
    document_type = serializers.CharField(read_only=True)


class CustomerSerializer(serializers.Serializer):
    """Read-only projection of the Customer aggregate."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    emails = EmailSerializer(many=True, read_only=True)
    phones = PhoneSerializer(many=True, read_only=True)
    addresses = AddressSerializer(many=True, read_only=True)
    documents = DocumentSerializer(many=True, read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
