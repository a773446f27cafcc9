"""
DRF views exposing the branding context.

    GET  branding/         -> snapshot for the request's host
    POST branding/switch/  -> switch to {"slug": ..., "url": <page>}
"""

import logging

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from empresa_branding.branding import ResolutionState
from empresa_branding.context import BrandingContext
from empresa_branding.drf.serializers import (
    ResolutionStateSerializer,
    SwitchTenantSerializer,
)
from empresa_branding.exceptions import InvalidEnvironmentError, TenantNotFoundError
from empresa_branding.resolvers import RequestEnvironment, TenantResolver


logger = logging.getLogger(__name__)


class BrandingAPIMixin:
    """Shared wiring for branding views."""

    # Storefront pages need branding before anyone logs in
    authentication_classes = []
    permission_classes = [AllowAny]

    resolver_class = TenantResolver

    def get_resolver(self) -> TenantResolver:
        return self.resolver_class()

    def get_environment(self, request) -> RequestEnvironment:
        return RequestEnvironment.from_request(request)


class CurrentBrandingView(BrandingAPIMixin, APIView):
    """
    Return the branding snapshot for the current request.

    Reuses the snapshot from BrandingMiddleware when it ran; otherwise
    resolves it here.
    """

    def get(self, request):
        state = getattr(request, "branding_state", None)

        if state is None:
            resolution = async_to_sync(self.get_resolver().resolve)(
                self.get_environment(request)
            )
            state = ResolutionState(
                tenant=resolution.tenant,
                branding=resolution.branding,
                loading=False,
                error=resolution.error,
            )

        return Response(ResolutionStateSerializer(state).data)


class SwitchTenantView(BrandingAPIMixin, APIView):
    """
    Switch the branding context to another empresa by slug.

    Responds 200 with the new snapshot, 404 when no active empresa has
    that slug and 502 when the lookup failed; failed switches return
    the unchanged snapshot with ``error`` set.

    ``share_url`` is the branded page's URL carrying the tenant
    parameter. The page is taken from the ``url`` field, then from the
    Referer header, then from the request itself.
    """

    def post(self, request):
        serializer = SwitchTenantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        slug = serializer.validated_data["slug"]

        context = BrandingContext(
            self.get_page_environment(request, serializer.validated_data.get("url")),
            resolver=self.get_resolver(),
        )
        failure = async_to_sync(self._switch)(context, slug)

        if failure is None:
            response_status = status.HTTP_200_OK
        elif isinstance(failure, TenantNotFoundError):
            response_status = status.HTTP_404_NOT_FOUND
        else:
            response_status = status.HTTP_502_BAD_GATEWAY

        return Response(
            {
                "state": ResolutionStateSerializer(context.current_state()).data,
                "share_url": context.share_url,
            },
            status=response_status,
        )

    def get_page_environment(self, request, page_url: str = None) -> RequestEnvironment:
        page_url = page_url or request.META.get("HTTP_REFERER")
        if page_url:
            try:
                return RequestEnvironment.from_url(page_url)
            except InvalidEnvironmentError:
                logger.debug("Ignoring page URL without a host: %s", page_url)
        return self.get_environment(request)

    async def _switch(self, context: BrandingContext, slug: str):
        await context.activate()
        return await context.switch_tenant(slug)
