"""
Middleware for django-empresa-branding.

Provides BrandingMiddleware, which resolves the active empresa for each
request and attaches its branding snapshot to the request.
"""

import re
from typing import Callable

from asgiref.sync import async_to_sync
from django.http import HttpRequest, HttpResponse

from empresa_branding.branding import ResolutionState
from empresa_branding.conf import branding_settings
from empresa_branding.resolvers import RequestEnvironment, TenantResolver


class BrandingMiddleware:
    """
    Middleware that resolves tenant branding for each request.

    Sets on the request:
        request.branding_state: The ResolutionState for this request
        request.tenant: The resolved TenantRecord, or None
        request.branding: The resolved Branding (always populated)

    Configuration:
        EMPRESA_BRANDING_EXEMPT_URLS: List of URL patterns to skip
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        """
        Initialize the middleware.

        Args:
            get_response: The next middleware/view in the chain
        """
        self.get_response = get_response
        self._resolver = None
        self._exempt_patterns = self._compile_exempt_patterns()

    @property
    def resolver(self) -> TenantResolver:
        """Lazy-load the resolver to avoid errors during startup."""
        if self._resolver is None:
            self._resolver = TenantResolver()
        return self._resolver

    def _compile_exempt_patterns(self) -> list:
        """Compile exempt URL patterns for faster matching."""
        patterns = branding_settings.EXEMPT_URLS
        return [re.compile(pattern) for pattern in patterns]

    def _is_exempt(self, path: str) -> bool:
        """Check if a path is exempt from tenant resolution."""
        return any(pattern.match(path) for pattern in self._exempt_patterns)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process the request and resolve its branding.

        Args:
            request: The incoming HTTP request

        Returns:
            The response from the view/next middleware
        """
        # Exempt requests still see a complete (default) snapshot
        state = ResolutionState.initial().evolve(loading=False)

        if not self._is_exempt(request.path):
            environment = RequestEnvironment.from_request(request)
            resolution = async_to_sync(self.resolver.resolve)(environment)
            state = ResolutionState(
                tenant=resolution.tenant,
                branding=resolution.branding,
                loading=False,
                error=resolution.error,
            )

        request.branding_state = state
        request.tenant = state.tenant
        request.branding = state.branding

        return self.get_response(request)
