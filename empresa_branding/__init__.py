"""
django-empresa-branding

Tenant resolution and branding context for the multi-tenant
custom-apparel admin console.
"""

__version__ = "0.1.0"
__author__ = "RAJID K K"
__email__ = "rajidkk34@gmail.com"

# Public API exports
from empresa_branding.branding import (
    DEFAULT_BRANDING,
    Branding,
    ResolutionState,
    TenantRecord,
    build_branding,
)
from empresa_branding.exceptions import (
    BrandingException,
    TenantNotFoundError,
    GatewayError,
    GatewayTimeoutError,
    InvalidEnvironmentError,
)

__all__ = [
    "__version__",
    "DEFAULT_BRANDING",
    "Branding",
    "ResolutionState",
    "TenantRecord",
    "build_branding",
    "BrandingException",
    "TenantNotFoundError",
    "GatewayError",
    "GatewayTimeoutError",
    "InvalidEnvironmentError",
]
