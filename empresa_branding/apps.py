"""
Django app configuration for empresa_branding.
"""

from django.apps import AppConfig


class EmpresaBrandingConfig(AppConfig):
    """
    App configuration for django-empresa-branding.

    Resolves the active empresa (tenant) from the request host and
    exposes its branding to templates and the API.
    """

    name = "empresa_branding"
    verbose_name = "Empresa Branding"
    default_auto_field = "django.db.models.BigAutoField"
