"""
Tenant resolution for django-empresa-branding.

Decides which empresa is active for an execution environment
(hostname + query string) and maps the lookup result onto branding:

- development-like hosts (localhost, loopback, preview hosting) are
  resolved by slug, taken from the query string or the fallback slug;
- every other host is resolved by exact domain match.
"""

import asyncio
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from django.http import HttpRequest

from empresa_branding.branding import (
    DEFAULT_BRANDING,
    Branding,
    TenantRecord,
    build_branding,
)
from empresa_branding.conf import branding_settings
from empresa_branding.exceptions import (
    GatewayError,
    GatewayTimeoutError,
    InvalidEnvironmentError,
    TenantNotFoundError,
)
from empresa_branding.gateways import BaseTenantGateway, get_gateway
from empresa_branding.models import EmpresaStatus
from empresa_branding.utils import audit_log


logger = logging.getLogger(__name__)


class Environment(str, enum.Enum):
    """Deployment class of the current host."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


def normalize_hostname(host: str) -> str:
    """
    Lowercase a host and strip any port.

    Handles bracketed IPv6 literals ('[::1]:8000' -> '::1').
    """
    host = (host or "").strip().lower()

    if host.startswith("["):
        return host[1:].split("]", 1)[0]

    # Remove port if present (a bare IPv6 address has several colons)
    if host.count(":") == 1:
        host = host.split(":")[0]

    return host


def classify_environment(hostname: str, patterns: Iterable[str] = None) -> Environment:
    """
    Classify a hostname as development-like or production-like.

    Args:
        hostname: The request hostname (a port is ignored)
        patterns: Regexes marking development hosts; defaults to
            DEVELOPMENT_HOST_PATTERNS

    Returns:
        Environment.DEVELOPMENT if any pattern matches, else PRODUCTION
    """
    if patterns is None:
        patterns = branding_settings.DEVELOPMENT_HOST_PATTERNS

    host = normalize_hostname(hostname)
    for pattern in patterns:
        if re.search(pattern, host):
            return Environment.DEVELOPMENT
    return Environment.PRODUCTION


@dataclass(frozen=True)
class RequestEnvironment:
    """
    The environment signals tenant resolution depends on.

    Attributes:
        hostname: Normalized hostname (no port)
        query: Query string parameters (last value wins)
        url: The shareable application URL
    """

    hostname: str
    query: Dict[str, str] = field(default_factory=dict, hash=False)
    url: str = ""

    def __post_init__(self):
        if not self.hostname:
            raise InvalidEnvironmentError("Environment has no hostname")

    @classmethod
    def from_url(cls, url: str) -> "RequestEnvironment":
        parts = urlsplit(url)
        hostname = normalize_hostname(parts.netloc.rsplit("@", 1)[-1])
        return cls(
            hostname=hostname,
            query=dict(parse_qsl(parts.query)),
            url=url,
        )

    @classmethod
    def from_request(cls, request: HttpRequest) -> "RequestEnvironment":
        return cls(
            hostname=normalize_hostname(request.get_host()),
            query={key: request.GET.get(key) for key in request.GET},
            url=request.build_absolute_uri(),
        )

    def with_query_param(self, name: str, value: str) -> "RequestEnvironment":
        """Return a copy whose URL and query carry ``name=value``."""
        query = dict(self.query)
        query[name] = value

        url = self.url
        if url:
            parts = urlsplit(url)
            params = [(k, v) for k, v in parse_qsl(parts.query) if k != name]
            params.append((name, value))
            url = urlunsplit(parts._replace(query=urlencode(params)))

        return RequestEnvironment(hostname=self.hostname, query=query, url=url)


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolution attempt."""

    tenant: Optional[TenantRecord]
    branding: Branding
    error: Optional[str] = None


class TenantResolver:
    """
    Resolves the active tenant for an environment through a gateway.

    resolve() never raises lookup failures: they become a Resolution
    with default branding and an ``error`` message.
    """

    def __init__(
        self,
        gateway: BaseTenantGateway = None,
        table: str = None,
        development_patterns: Iterable[str] = None,
        query_param: str = None,
        fallback_slug: str = None,
        timeout: Optional[float] = None,
    ):
        self.gateway = gateway if gateway is not None else get_gateway()
        self.table = table or branding_settings.TENANT_TABLE
        self.development_patterns = (
            list(development_patterns)
            if development_patterns is not None
            else list(branding_settings.DEVELOPMENT_HOST_PATTERNS)
        )
        self.query_param = query_param or branding_settings.TENANT_QUERY_PARAM
        self.fallback_slug = fallback_slug or branding_settings.FALLBACK_TENANT_SLUG
        self.timeout = timeout if timeout is not None else branding_settings.LOOKUP_TIMEOUT

    def lookup_filters(self, environment: RequestEnvironment) -> Dict[str, str]:
        """Decide which column to query for an environment."""
        kind = classify_environment(environment.hostname, self.development_patterns)
        logger.debug("Host %s classified as %s", environment.hostname, kind.value)

        if kind is Environment.DEVELOPMENT:
            slug = environment.query.get(self.query_param) or self.fallback_slug
            return {"slug": slug.lower(), "status": EmpresaStatus.ATIVO.value}

        return {"dominio": environment.hostname, "status": EmpresaStatus.ATIVO.value}

    async def _lookup(self, filters: Dict[str, str]):
        """
        Run one gateway lookup.

        Any failure surfaces as GatewayError, whatever the gateway raised.
        """
        try:
            lookup = self.gateway.lookup(self.table, filters)
            if not self.timeout:
                return await lookup
            return await asyncio.wait_for(lookup, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise GatewayTimeoutError(
                timeout=self.timeout,
                table=self.table,
                filters=filters,
            ) from e
        except GatewayError:
            raise
        except Exception as e:
            logger.exception("Unexpected error from %s", type(self.gateway).__name__)
            raise GatewayError(str(e) or type(e).__name__, table=self.table, filters=filters) from e

    async def resolve(self, environment: RequestEnvironment) -> Resolution:
        """
        Resolve tenant and branding for an environment.

        Args:
            environment: Hostname and query parameters of the request

        Returns:
            A Resolution; gateway errors yield default branding with
            ``error`` set, no match yields default branding without error
        """
        filters = self.lookup_filters(environment)
        logger.debug("Looking up %s with %s", self.table, filters)

        try:
            row = await self._lookup(filters)
        except GatewayError as e:
            logger.error("Tenant lookup failed for %s: %s", environment.hostname, e)
            audit_log(
                event="tenant_resolution_failed",
                environment=environment,
                success=False,
                extra={"error": str(e), "filters": filters},
            )
            return Resolution(tenant=None, branding=DEFAULT_BRANDING, error=str(e))

        if row is None:
            logger.info("No active empresa for %s, using default branding", filters)
            return Resolution(tenant=None, branding=DEFAULT_BRANDING)

        tenant = TenantRecord.from_row(row)
        audit_log(event="tenant_resolved", tenant=tenant, environment=environment)
        return Resolution(tenant=tenant, branding=build_branding(row))

    async def lookup_by_slug(self, slug: str) -> Resolution:
        """
        Look up an active tenant by slug, bypassing hostname detection.

        Args:
            slug: The tenant slug

        Returns:
            A Resolution with the tenant populated

        Raises:
            TenantNotFoundError: If no active tenant has that slug
            GatewayError: If the lookup itself fails
        """
        filters = {"slug": (slug or "").lower(), "status": EmpresaStatus.ATIVO.value}
        row = await self._lookup(filters)

        if row is None:
            raise TenantNotFoundError(identifier=slug)

        return Resolution(tenant=TenantRecord.from_row(row), branding=build_branding(row))
