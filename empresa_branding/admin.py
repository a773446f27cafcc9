"""
Django admin integration for django-empresa-branding.

Provides the admin class for managing empresas and their branding.
"""

from django.contrib import admin
from django.utils.html import format_html, format_html_join
from django.utils.translation import gettext_lazy as _

from empresa_branding.branding import build_branding
from empresa_branding.models import Empresa


@admin.register(Empresa)
class EmpresaAdmin(admin.ModelAdmin):
    """
    Admin interface for Empresa model.

    Shows the effective branding (with defaults applied) next to the
    raw color columns.
    """

    list_display = [
        "nome",
        "slug",
        "dominio",
        "status",
        "color_swatches",
        "created_at",
    ]
    list_filter = ["status", "created_at"]
    search_fields = ["nome", "slug", "dominio"]
    prepopulated_fields = {"slug": ("nome",)}
    readonly_fields = ["id", "color_swatches", "created_at", "updated_at"]
    ordering = ["-created_at"]

    fieldsets = (
        (None, {
            "fields": ("nome", "slug", "status")
        }),
        (_("Domain Configuration"), {
            "fields": ("dominio",),
        }),
        (_("Branding"), {
            "fields": (
                "logo_url",
                "cor_primary",
                "cor_accent",
                "cor_bg",
                "cor_text",
                "color_swatches",
            ),
        }),
        (_("Metadata"), {
            "fields": ("metadata",),
            "classes": ("collapse",),
        }),
        (_("System Information"), {
            "fields": ("id", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    def color_swatches(self, obj):
        """Render the effective brand colors as small swatches."""
        branding = build_branding({
            "cor_primary": obj.cor_primary,
            "cor_accent": obj.cor_accent,
            "cor_bg": obj.cor_bg,
            "cor_text": obj.cor_text,
        })
        return format_html_join(
            "",
            '<span title="{}" style="display:inline-block;width:14px;height:14px;'
            'margin-right:2px;border:1px solid #ccc;background:{}"></span>',
            (
                ("primary", branding.primary),
                ("accent", branding.accent),
                ("bg", branding.bg),
                ("text", branding.text),
            ),
        )
    color_swatches.short_description = _("Branding")

    actions = ["activate", "deactivate"]

    @admin.action(description=_("Mark selected empresas as active"))
    def activate(self, request, queryset):
        updated = queryset.update(status="ativo")
        self.message_user(request, f"{updated} empresa(s) activated.")

    @admin.action(description=_("Mark selected empresas as inactive"))
    def deactivate(self, request, queryset):
        updated = queryset.update(status="inativo")
        self.message_user(request, f"{updated} empresa(s) deactivated.")
