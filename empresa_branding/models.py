"""
Core data model for django-empresa-branding.

Defines the Empresa model backing the ``empresas`` table: one
independently-branded storefront sharing the application deployment.
"""

import uuid

from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from empresa_branding.branding import COLOR_PATTERN


validate_color = RegexValidator(
    regex=r"\A(?:%s)\Z" % COLOR_PATTERN.pattern,
    message=_("Enter a CSS color such as #FF6A00, red or rgb(255, 106, 0)."),
)


class EmpresaStatus(models.TextChoices):
    """Lifecycle states of an empresa. Only ``ativo`` ones are resolvable."""

    ATIVO = "ativo", _("Ativo")
    INATIVO = "inativo", _("Inativo")


class Empresa(models.Model):
    """
    Represents one business/storefront instance (a tenant).

    Attributes:
        id: UUID primary key
        nome: Display name
        dominio: Fully-qualified production hostname (unique, optional)
        slug: Short identifier used in development environments (unique)
        logo_url: Optional logo location
        cor_primary, cor_accent, cor_bg, cor_text: CSS color tokens;
            empty values fall back to the system default branding
        status: ``ativo`` or ``inativo``
        metadata: Free-form JSON, opaque to tenant resolution
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text=_("Unique identifier for the empresa")
    )

    nome = models.CharField(
        max_length=255,
        help_text=_("Display name of the empresa")
    )

    dominio = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text=_("Production hostname, matched exactly (optional)")
    )

    slug = models.SlugField(
        max_length=100,
        unique=True,
        help_text=_("Short identifier used outside production (must be unique)")
    )

    logo_url = models.URLField(
        max_length=500,
        null=True,
        blank=True,
        help_text=_("Logo image URL (optional)")
    )

    cor_primary = models.CharField(max_length=32, null=True, blank=True, validators=[validate_color])
    cor_accent = models.CharField(max_length=32, null=True, blank=True, validators=[validate_color])
    cor_bg = models.CharField(max_length=32, null=True, blank=True, validators=[validate_color])
    cor_text = models.CharField(max_length=32, null=True, blank=True, validators=[validate_color])

    status = models.CharField(
        max_length=16,
        choices=EmpresaStatus.choices,
        default=EmpresaStatus.ATIVO,
        db_index=True,
    )

    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("Custom metadata for the empresa")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "empresas"
        ordering = ["nome"]
        verbose_name = _("Empresa")
        verbose_name_plural = _("Empresas")

    def __str__(self) -> str:
        return self.nome

    def clean(self):
        """Normalize routing keys before saving."""
        super().clean()

        if self.slug:
            self.slug = self.slug.lower()

        # An empty domain must be stored as NULL so uniqueness holds
        if self.dominio:
            self.dominio = self.dominio.strip().lower()
        else:
            self.dominio = None

    @property
    def is_active(self) -> bool:
        return self.status == EmpresaStatus.ATIVO
