"""
Branding context for django-empresa-branding.

BrandingContext owns the single writable ResolutionState for one
consumer scope (a page, a session, a test). It is an ordinary object:
the composition root builds one and hands it to whoever needs branding.

Concurrency: resolution runs on one event loop and the gateway lookup
is the only await point. Every reload()/switch_tenant() call takes a
ticket from a monotonic counter; a completion only publishes when its
ticket is still the latest one issued, so the final state always
reflects the last request made, not the last one to return.
"""

import logging
from typing import Callable, List, Optional

from empresa_branding.branding import ResolutionState
from empresa_branding.exceptions import (
    BrandingException,
    GatewayError,
    TenantNotFoundError,
)
from empresa_branding.resolvers import RequestEnvironment, TenantResolver
from empresa_branding.utils import audit_log


logger = logging.getLogger(__name__)

Subscriber = Callable[[ResolutionState], None]


class BrandingContext:
    """
    Holds the current tenant/branding snapshot and the commands that replace it.

    Usage:
        context = BrandingContext(RequestEnvironment.from_url(url))
        await context.activate()
        state = context.current_state()
    """

    def __init__(self, environment: RequestEnvironment, resolver: TenantResolver = None):
        self.environment = environment
        self.resolver = resolver if resolver is not None else TenantResolver()
        self._state = ResolutionState.initial()
        self._subscribers: List[Subscriber] = []
        self._sequence = 0
        self._activated = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def share_url(self) -> str:
        """Application URL that reproduces the active tenant on reload."""
        return self.environment.url

    def current_state(self) -> ResolutionState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for completed snapshot replacements.

        Args:
            callback: Called with the new ResolutionState

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispose(self):
        """Tear the context down; in-flight resolutions are discarded."""
        self._disposed = True
        self._subscribers.clear()

    async def activate(self):
        """Run the initial resolution. Later calls do nothing."""
        if self._activated:
            return
        self._activated = True
        await self.reload()

    async def reload(self):
        """Resolve from scratch against the current environment."""
        ticket = self._begin()
        if ticket is None:
            return

        environment = self.environment
        resolution = await self.resolver.resolve(environment)

        self._publish(
            ticket,
            ResolutionState(
                tenant=resolution.tenant,
                branding=resolution.branding,
                loading=False,
                error=resolution.error,
            ),
        )

    async def switch_tenant(self, slug: str) -> Optional[BrandingException]:
        """
        Switch to the active tenant with the given slug.

        On failure the previous tenant and branding are kept and the
        reason is reported through ``error``.

        Returns:
            The TenantNotFoundError or GatewayError behind a failed
            switch, None otherwise
        """
        ticket = self._begin()
        if ticket is None:
            return None

        try:
            resolution = await self.resolver.lookup_by_slug(slug)
        except (TenantNotFoundError, GatewayError) as e:
            logger.warning("Switch to tenant '%s' failed: %s", slug, e)
            audit_log(
                event="tenant_switch_failed",
                tenant=self._state.tenant,
                environment=self.environment,
                success=False,
                extra={"requested_slug": slug, "error": str(e)},
            )
            self._publish(ticket, self._state.evolve(loading=False, error=e.message))
            return e

        if not self._is_current(ticket):
            return None

        self.environment = self.environment.with_query_param(
            self.resolver.query_param, resolution.tenant.slug
        )
        audit_log(
            event="tenant_switched",
            tenant=resolution.tenant,
            environment=self.environment,
        )
        self._publish(
            ticket,
            ResolutionState(
                tenant=resolution.tenant,
                branding=resolution.branding,
                loading=False,
                error=None,
            ),
        )
        return None

    def _begin(self):
        if self._disposed:
            return None
        self._sequence += 1
        self._state = self._state.evolve(loading=True)
        return self._sequence

    def _is_current(self, ticket: int) -> bool:
        if self._disposed:
            logger.debug("Discarding resolution %s for disposed context", ticket)
            return False
        if ticket != self._sequence:
            logger.debug("Discarding stale resolution %s (latest %s)", ticket, self._sequence)
            return False
        return True

    def _publish(self, ticket: int, state: ResolutionState):
        if not self._is_current(ticket):
            return
        self._state = state
        for callback in list(self._subscribers):
            callback(state)
