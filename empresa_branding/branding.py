"""
Branding value objects for django-empresa-branding.

Branding is the presentation-only projection of a tenant row: four
color tokens and an optional logo. A Branding instance is always fully
populated, so consumers never special-case a missing color.
"""

import logging
import re
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branding:
    """Resolved presentation tokens for the active tenant or the system default."""

    primary: str
    accent: str
    bg: str
    text: str
    logo: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)

    def css_variables(self) -> Dict[str, str]:
        """Map the color tokens onto CSS custom property names."""
        return {
            "--brand-primary": self.primary,
            "--brand-accent": self.accent,
            "--brand-bg": self.bg,
            "--brand-text": self.text,
        }


DEFAULT_BRANDING = Branding(
    primary="#111111",
    accent="#FF6A00",
    bg="#FFFFFF",
    text="#000000",
    logo=None,
)

# Row column -> Branding field
BRANDING_COLUMNS = {
    "cor_primary": "primary",
    "cor_accent": "accent",
    "cor_bg": "bg",
    "cor_text": "text",
    "logo_url": "logo",
}


# Color syntaxes accepted in a CSS declaration value: hex, named or
# rgb()/hsl() functions.
COLOR_PATTERN = re.compile(
    r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
    r"|[a-zA-Z]{3,32}"
    r"|(?:rgb|rgba|hsl|hsla)\([0-9.,%\s/]+\)"
)

COLOR_FIELDS = ("primary", "accent", "bg", "text")


def is_valid_color(value: str) -> bool:
    return bool(COLOR_PATTERN.fullmatch(value))


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def build_branding(row: Mapping[str, Any], default: Branding = DEFAULT_BRANDING) -> Branding:
    """
    Project a tenant row onto a Branding.

    Each null or blank color/logo column, and each color that is not a
    plain CSS color value, is replaced by the matching field of
    ``default``.

    Args:
        row: A tenant row as returned by the gateway
        default: Branding supplying the fallback values

    Returns:
        A fully populated Branding
    """
    values = {}
    for column, attr in BRANDING_COLUMNS.items():
        value = row.get(column)
        if not _present(value):
            values[attr] = getattr(default, attr)
            continue

        value = value.strip()
        if attr in COLOR_FIELDS and not is_valid_color(value):
            logger.warning("Ignoring invalid color %r in column %s", value, column)
            value = getattr(default, attr)
        values[attr] = value
    return Branding(**values)


@dataclass(frozen=True)
class TenantRecord:
    """
    Read-only view of one ``empresas`` row.

    Built from whatever mapping the gateway returns; the ORM model is
    not exposed to consumers.
    """

    id: str
    nome: str
    slug: str
    dominio: Optional[str] = None
    logo_url: Optional[str] = None
    cor_primary: Optional[str] = None
    cor_accent: Optional[str] = None
    cor_bg: Optional[str] = None
    cor_text: Optional[str] = None
    status: str = "ativo"
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TenantRecord":
        return cls(
            id=str(row["id"]),
            nome=row.get("nome") or "",
            slug=row.get("slug") or "",
            dominio=row.get("dominio"),
            logo_url=row.get("logo_url"),
            cor_primary=row.get("cor_primary"),
            cor_accent=row.get("cor_accent"),
            cor_bg=row.get("cor_bg"),
            cor_text=row.get("cor_text"),
            status=row.get("status") or "ativo",
            metadata=dict(row.get("metadata") or {}),
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ResolutionState:
    """
    Snapshot of the branding context.

    Snapshots are never mutated: every change produces a new instance,
    so ``tenant`` and ``branding`` always come from the same resolution.
    """

    tenant: Optional[TenantRecord] = None
    branding: Branding = DEFAULT_BRANDING
    loading: bool = True
    error: Optional[str] = None

    @classmethod
    def initial(cls) -> "ResolutionState":
        return cls()

    def evolve(self, **changes) -> "ResolutionState":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "tenant": self.tenant.as_dict() if self.tenant else None,
            "branding": self.branding.as_dict(),
            "loading": self.loading,
            "error": self.error,
        }
