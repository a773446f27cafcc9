"""
Configuration settings for django-empresa-branding.

Provides default settings and a Settings accessor class that
allows per-project customization via Django settings.
"""

from django.conf import settings


# Default configuration values
EMPRESA_BRANDING_DEFAULTS = {
    # Dotted path of the gateway class used for tenant lookups
    "GATEWAY_CLASS": "empresa_branding.gateways.DjangoTenantGateway",

    # Remote table holding the tenants
    "TENANT_TABLE": "empresas",

    # Hostname regexes treated as development-like (slug driven) environments
    "DEVELOPMENT_HOST_PATTERNS": [
        r"^localhost$",
        r"^127(\.\d{1,3}){3}$",
        r"^::1$",
        r"\.lovableproject\.com$",
        r"\.lovable\.app$",
    ],

    # Query parameter carrying the tenant slug in development-like environments
    "TENANT_QUERY_PARAM": "tenant",

    # Slug used when no query parameter is present in development
    "FALLBACK_TENANT_SLUG": "agiluniformes",

    # Seconds to wait for a gateway lookup, None to wait forever
    "LOOKUP_TIMEOUT": None,

    # URLs that should bypass tenant resolution (list of regex patterns)
    "EXEMPT_URLS": [],

    # Enable audit logging for resolution events
    "AUDIT_ENABLED": True,

    # Audit logger name
    "AUDIT_LOGGER": "empresa_branding.audit",
}


class Settings:
    """
    Settings accessor that reads from Django settings with fallback to defaults.

    Usage:
        from empresa_branding.conf import branding_settings
        slug = branding_settings.FALLBACK_TENANT_SLUG
    """

    def __getattr__(self, name: str):
        """
        Get a setting value.

        First checks Django settings for EMPRESA_BRANDING_{name},
        then falls back to default value.

        Args:
            name: Setting name (without EMPRESA_BRANDING_ prefix)

        Returns:
            The setting value

        Raises:
            AttributeError: If setting name is not valid
        """
        if name not in EMPRESA_BRANDING_DEFAULTS:
            raise AttributeError(f"Invalid empresa_branding setting: '{name}'")

        django_setting_name = f"EMPRESA_BRANDING_{name}"
        return getattr(
            settings,
            django_setting_name,
            EMPRESA_BRANDING_DEFAULTS[name]
        )

    def __dir__(self):
        """Return list of available settings."""
        return list(EMPRESA_BRANDING_DEFAULTS.keys())


# Singleton instance for easy access
branding_settings = Settings()
