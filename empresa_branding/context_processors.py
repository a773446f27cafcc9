"""
Template context processor exposing the request's branding snapshot.

Add ``empresa_branding.context_processors.branding`` to the template
``context_processors`` option; BrandingMiddleware must run first.
"""

from empresa_branding.branding import DEFAULT_BRANDING


def branding(request):
    """Expose ``tenant``, ``branding`` and ``branding_error`` to templates."""
    state = getattr(request, "branding_state", None)
    if state is None:
        return {"tenant": None, "branding": DEFAULT_BRANDING, "branding_error": None}

    return {
        "tenant": state.tenant,
        "branding": state.branding,
        "branding_error": state.error,
    }
