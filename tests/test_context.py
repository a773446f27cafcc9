"""
Tests for the empresa_branding branding context.
"""

import asyncio

import pytest

from empresa_branding.branding import DEFAULT_BRANDING, Branding
from empresa_branding.context import BrandingContext
from empresa_branding.exceptions import GatewayError, TenantNotFoundError
from empresa_branding.resolvers import RequestEnvironment, TenantResolver
from tests.fakes import InMemoryTenantGateway, make_row


@pytest.fixture
def gateway():
    return InMemoryTenantGateway(rows=[
        make_row("agiluniformes", cor_primary="#222222"),
        make_row("acme", cor_primary="#AC0E00", cor_accent="#AC0E01"),
        make_row("beta", cor_primary="#BE7A00", logo_url="https://cdn.example.com/beta.png"),
        make_row("loja", dominio="loja.exemplo.com.br", cor_bg="#FAFAFA"),
    ])


def make_context(gateway, url="http://localhost:5173/admin?tenant=acme"):
    return BrandingContext(
        RequestEnvironment.from_url(url),
        resolver=TenantResolver(gateway=gateway),
    )


class TestInitialState:
    """Tests for the state before any resolution."""

    def test_loading_with_default_branding(self, gateway):
        context = make_context(gateway)

        state = context.current_state()

        assert state.loading is True
        assert state.tenant is None
        assert state.branding == DEFAULT_BRANDING
        assert state.error is None
        assert gateway.calls == []

    def test_activate_runs_reload_once(self, gateway):
        context = make_context(gateway)

        async def scenario():
            await context.activate()
            await context.activate()

        asyncio.run(scenario())

        assert len(gateway.calls) == 1
        assert context.current_state().tenant.slug == "acme"
        assert context.current_state().loading is False


class TestReload:
    """Tests for BrandingContext.reload()."""

    def test_reload_replaces_snapshot(self, gateway):
        context = make_context(gateway)

        asyncio.run(context.reload())

        state = context.current_state()
        assert state.tenant.slug == "acme"
        assert state.branding.primary == "#AC0E00"
        assert state.loading is False
        assert state.error is None

    def test_reload_is_idempotent(self, gateway):
        context = make_context(gateway)

        asyncio.run(context.reload())
        first = context.current_state()
        asyncio.run(context.reload())
        second = context.current_state()

        assert first == second
        assert first is not second

    def test_unknown_production_domain(self):
        """Scenario B through the context."""
        context = make_context(InMemoryTenantGateway(), url="https://loja.exemplo.com.br/")

        asyncio.run(context.reload())

        state = context.current_state()
        assert state.tenant is None
        assert state.branding == DEFAULT_BRANDING
        assert state.error is None
        assert state.loading is False

    def test_gateway_error_falls_back_to_defaults(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())
        gateway.error = GatewayError("network down")

        asyncio.run(context.reload())

        state = context.current_state()
        assert state.tenant is None
        assert state.branding == DEFAULT_BRANDING
        assert state.error == "network down"
        assert state.loading is False

    def test_unexpected_gateway_failure_settles(self):
        """A gateway raising outside GatewayError still ends the load."""
        context = make_context(InMemoryTenantGateway(error=ConnectionError("socket reset")))

        asyncio.run(context.reload())

        state = context.current_state()
        assert state.loading is False
        assert state.tenant is None
        assert state.branding == DEFAULT_BRANDING
        assert state.error == "socket reset"


class TestSwitchTenant:
    """Tests for BrandingContext.switch_tenant()."""

    def test_switch_replaces_snapshot(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())

        failure = asyncio.run(context.switch_tenant("beta"))

        state = context.current_state()
        assert state.tenant.slug == "beta"
        assert state.branding == Branding(
            primary="#BE7A00",
            accent="#FF6A00",
            bg="#FFFFFF",
            text="#000000",
            logo="https://cdn.example.com/beta.png",
        )
        assert state.error is None
        assert failure is None

    def test_switch_updates_share_url(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())

        asyncio.run(context.switch_tenant("beta"))

        assert context.share_url == "http://localhost:5173/admin?tenant=beta"
        assert context.environment.query["tenant"] == "beta"

    def test_reload_after_switch_keeps_tenant(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())
        asyncio.run(context.switch_tenant("beta"))

        asyncio.run(context.reload())

        assert context.current_state().tenant.slug == "beta"

    def test_switch_not_found_keeps_previous(self, gateway):
        """A missing tenant must not fall back to the defaults."""
        context = make_context(gateway)
        asyncio.run(context.reload())
        before = context.current_state()

        failure = asyncio.run(context.switch_tenant("doesnotexist"))

        state = context.current_state()
        assert state.tenant == before.tenant
        assert state.branding == before.branding
        assert state.error is not None
        assert state.loading is False
        assert isinstance(failure, TenantNotFoundError)
        assert context.share_url == "http://localhost:5173/admin?tenant=acme"

    def test_switch_gateway_error_keeps_previous(self, gateway):
        """Scenario C."""
        context = make_context(gateway)
        asyncio.run(context.reload())
        before = context.current_state()
        gateway.error = GatewayError("service unavailable")

        failure = asyncio.run(context.switch_tenant("beta"))

        state = context.current_state()
        assert state.tenant == before.tenant
        assert state.branding == before.branding
        assert state.error == "service unavailable"
        assert state.loading is False
        assert isinstance(failure, GatewayError)

    def test_unexpected_gateway_failure_keeps_previous(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())
        before = context.current_state()
        gateway.error = ConnectionError("socket reset")

        failure = asyncio.run(context.switch_tenant("beta"))

        state = context.current_state()
        assert state.tenant == before.tenant
        assert state.branding == before.branding
        assert state.error == "socket reset"
        assert state.loading is False
        assert isinstance(failure, GatewayError)
        assert isinstance(failure.__cause__, ConnectionError)
        assert failure.filters == {"slug": "beta", "status": "ativo"}

    def test_successful_switch_clears_error(self, gateway):
        context = make_context(gateway)
        asyncio.run(context.reload())
        asyncio.run(context.switch_tenant("doesnotexist"))

        failure = asyncio.run(context.switch_tenant("beta"))

        assert context.current_state().error is None
        assert failure is None


class TestSubscribe:
    """Tests for subscriber notification."""

    def test_called_once_per_completed_operation(self, gateway):
        context = make_context(gateway)
        received = []
        context.subscribe(received.append)

        async def scenario():
            await context.reload()
            await context.switch_tenant("beta")
            await context.switch_tenant("doesnotexist")

        asyncio.run(scenario())

        assert [s.tenant.slug for s in received] == ["acme", "beta", "beta"]
        assert all(s.loading is False for s in received)
        assert received[-1].error is not None

    def test_unsubscribe(self, gateway):
        context = make_context(gateway)
        received = []
        unsubscribe = context.subscribe(received.append)

        asyncio.run(context.reload())
        unsubscribe()
        unsubscribe()
        asyncio.run(context.reload())

        assert len(received) == 1


class TestConcurrency:
    """Tests for overlapping reload/switch calls."""

    def test_last_issued_request_wins(self, gateway):
        context = make_context(gateway)
        gate = asyncio.Event()
        gateway.gates["acme"] = gate

        async def scenario():
            slow = asyncio.ensure_future(context.reload())
            await asyncio.sleep(0)
            await context.switch_tenant("beta")
            gate.set()
            await slow

        asyncio.run(scenario())

        # The reload for "acme" returned last but was issued first
        state = context.current_state()
        assert state.tenant.slug == "beta"
        assert state.loading is False

    def test_stale_failure_does_not_overwrite(self, gateway):
        context = make_context(gateway)
        gate = asyncio.Event()
        gateway.gates["doesnotexist"] = gate

        async def scenario():
            await context.reload()
            slow = asyncio.ensure_future(context.switch_tenant("doesnotexist"))
            await asyncio.sleep(0)
            await context.switch_tenant("beta")
            gate.set()
            return await slow

        stale = asyncio.run(scenario())

        state = context.current_state()
        assert state.tenant.slug == "beta"
        assert state.error is None
        # The caller still learns its own switch failed
        assert isinstance(stale, TenantNotFoundError)

    def test_loading_while_in_flight(self, gateway):
        context = make_context(gateway)
        gate = asyncio.Event()
        gateway.gates["beta"] = gate
        seen = []

        async def scenario():
            await context.reload()
            task = asyncio.ensure_future(context.switch_tenant("beta"))
            await asyncio.sleep(0)
            state = context.current_state()
            seen.append((state.loading, state.tenant.slug))
            gate.set()
            await task

        asyncio.run(scenario())

        # Still the previous tenant, flagged as loading
        assert seen == [(True, "acme")]
        assert context.current_state().loading is False
        assert context.current_state().tenant.slug == "beta"


class TestDispose:
    """Tests for completions arriving after disposal."""

    def test_late_completion_is_ignored(self, gateway):
        context = make_context(gateway)
        gate = asyncio.Event()
        gateway.gates["acme"] = gate
        received = []
        context.subscribe(received.append)

        async def scenario():
            task = asyncio.ensure_future(context.reload())
            await asyncio.sleep(0)
            context.dispose()
            gate.set()
            await task

        asyncio.run(scenario())

        assert context.disposed is True
        assert received == []
        assert context.current_state().tenant is None

    def test_commands_after_dispose_do_nothing(self, gateway):
        context = make_context(gateway)
        context.dispose()

        asyncio.run(context.reload())
        asyncio.run(context.switch_tenant("beta"))

        assert gateway.calls == []
