"""
Tests for the AccessService orchestration layer.
"""

from agendacore.adapters.static_identity import StaticIdentityProvider
from agendacore.domain.access import AccessAction, AccessDecision
from agendacore.domain.roles import Role
from agendacore.services.access_service import AccessService, Identity, Profile


class StubIdentityProvider:
    """Minimal stub matching IdentityProviderProtocol."""

    def __init__(self, identity: Identity, loading: bool = False):
        self._identity = identity
        self.loading = loading
        self.calls = 0

    def current_identity(self) -> Identity:
        self.calls += 1
        return self._identity


def _owner_identity() -> Identity:
    return Identity(authenticated=True, profile=Profile(id="u1", role=Role.BUSINESS_OWNER, business_id="b1"))


class TestNavigate:
    """Tests for guarding concrete paths."""

    def test_owner_on_admin_route_goes_to_business_dashboard(self):
        service = AccessService(StubIdentityProvider(_owner_identity()))

        decision = service.navigate("/admin/usuarios")

        assert decision == AccessDecision.redirect("/negocio/dashboard")

    def test_owner_on_own_route_renders(self):
        service = AccessService(StubIdentityProvider(_owner_identity()))

        assert service.navigate("/negocio/lojas").action is AccessAction.RENDER

    def test_anonymous_on_guarded_route_goes_to_login(self):
        service = AccessService(StaticIdentityProvider.anonymous())

        assert service.navigate("/profissional/perfil") == AccessDecision.redirect("/login")

    def test_anonymous_on_public_route_renders(self):
        service = AccessService(StaticIdentityProvider.anonymous())

        assert service.navigate("/agendar/salao-bella").action is AccessAction.RENDER

    def test_loading_does_not_read_identity(self):
        provider = StubIdentityProvider(_owner_identity(), loading=True)
        service = AccessService(provider)

        assert service.navigate("/admin/dashboard").action is AccessAction.LOADING
        assert provider.calls == 0

    def test_unknown_path(self):
        service = AccessService(StaticIdentityProvider.signed_in(Role.CLIENT))

        assert service.navigate("/nada").action is AccessAction.NOT_FOUND


class TestGuard:
    """Tests for guarding arbitrary content."""

    def test_guard_without_roles_renders_for_any_signed_in_user(self):
        service = AccessService(StaticIdentityProvider.signed_in(Role.CLIENT))

        assert service.guard().action is AccessAction.RENDER

    def test_guard_with_roles(self):
        service = AccessService(StaticIdentityProvider.signed_in(Role.PROFESSIONAL))

        decision = service.guard(allowed_roles=[Role.SAAS_ADMIN])

        assert decision == AccessDecision.redirect("/profissional/dashboard")

    def test_guard_follows_session_changes(self):
        provider = StaticIdentityProvider.anonymous(loading=True)
        service = AccessService(provider)

        assert service.guard([Role.SAAS_ADMIN]).action is AccessAction.LOADING

        provider.finish_loading()
        assert service.guard([Role.SAAS_ADMIN]) == AccessDecision.redirect("/login")

        provider.sign_in(Profile(id="a1", role=Role.SAAS_ADMIN))
        assert service.guard([Role.SAAS_ADMIN]).action is AccessAction.RENDER

        provider.sign_out()
        assert service.guard([Role.SAAS_ADMIN]) == AccessDecision.redirect("/login")


class TestPostLoginRedirect:
    """Tests for the landing page after sign-in."""

    def test_each_role(self):
        expected = {
            Role.SAAS_ADMIN: "/admin/dashboard",
            Role.BUSINESS_OWNER: "/negocio/dashboard",
            Role.PROFESSIONAL: "/profissional/dashboard",
            Role.CLIENT: "/",
        }
        for role, path in expected.items():
            service = AccessService(StaticIdentityProvider.signed_in(role))
            assert service.post_login_redirect() == path

    def test_not_signed_in(self):
        assert AccessService(StaticIdentityProvider.anonymous()).post_login_redirect() is None
        assert AccessService(StaticIdentityProvider.anonymous(loading=True)).post_login_redirect() is None

    def test_profile_missing(self):
        service = AccessService(StubIdentityProvider(Identity(authenticated=True)))

        assert service.post_login_redirect() is None
