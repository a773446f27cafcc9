"""
DRF serializers for django-empresa-branding.

Serialize the branding snapshot objects; they are plain dataclasses,
so every serializer here is a plain Serializer, not a ModelSerializer.
"""

from rest_framework import serializers


class BrandingSerializer(serializers.Serializer):
    """Serializer for Branding."""

    primary = serializers.CharField(read_only=True)
    accent = serializers.CharField(read_only=True)
    bg = serializers.CharField(read_only=True)
    text = serializers.CharField(read_only=True)
    logo = serializers.CharField(read_only=True, allow_null=True)


class TenantSerializer(serializers.Serializer):
    """Serializer for TenantRecord."""

    id = serializers.CharField(read_only=True)
    nome = serializers.CharField(read_only=True)
    slug = serializers.CharField(read_only=True)
    dominio = serializers.CharField(read_only=True, allow_null=True)
    logo_url = serializers.CharField(read_only=True, allow_null=True)
    status = serializers.CharField(read_only=True)
    metadata = serializers.JSONField(read_only=True)


class ResolutionStateSerializer(serializers.Serializer):
    """Serializer for the full ResolutionState snapshot."""

    tenant = TenantSerializer(read_only=True, allow_null=True)
    branding = BrandingSerializer(read_only=True)
    loading = serializers.BooleanField(read_only=True)
    error = serializers.CharField(read_only=True, allow_null=True)


class SwitchTenantSerializer(serializers.Serializer):
    """Input for the switch endpoint."""

    slug = serializers.SlugField(max_length=100)
    url = serializers.URLField(
        required=False,
        help_text="Page being branded; the returned share_url is built from it",
    )
