"""
Tests for the route table.
"""

import pytest

from agendacore.domain.roles import Role
from agendacore.domain.routes import DEFAULT_ROUTES, RouteRule, RouteTable


class TestRouteRule:
    """Tests for RouteRule pattern matching."""

    def test_exact_match(self):
        rule = RouteRule(pattern="/negocio/lojas")

        assert rule.matches("/negocio/lojas")
        assert rule.matches("/negocio/lojas/")
        assert not rule.matches("/negocio")
        assert not rule.matches("/negocio/lojas/1")

    def test_parameter_segment(self):
        """Segments starting with ':' match any value."""
        rule = RouteRule(pattern="/agendar/:slug")

        assert rule.matches("/agendar/bella-vista")
        assert not rule.matches("/agendar")

    def test_query_string_is_ignored(self):
        rule = RouteRule(pattern="/login")

        assert rule.matches("/login?next=/negocio/lojas")

    def test_root(self):
        rule = RouteRule(pattern="/")

        assert rule.matches("/")
        assert not rule.matches("/login")

    def test_pattern_must_be_absolute(self):
        with pytest.raises(ValueError, match="must start with '/'"):
            RouteRule(pattern="admin/dashboard")


class TestRouteTable:
    """Tests for the default route table."""

    def setup_method(self):
        self.table = RouteTable()

    def test_role_dashboards_are_guarded_for_their_role(self):
        """Every role dashboard is reachable by its own role only."""
        expectations = {
            "/admin/dashboard": Role.SAAS_ADMIN,
            "/negocio/dashboard": Role.BUSINESS_OWNER,
            "/profissional/dashboard": Role.PROFESSIONAL,
        }
        for path, role in expectations.items():
            rule = self.table.match(path)
            assert rule is not None
            assert rule.allowed_roles == frozenset({role})
            assert rule.require_auth

    def test_public_routes(self):
        for path in ("/", "/login", "/cadastro", "/agendar/salao-bella"):
            rule = self.table.match(path)
            assert rule is not None
            assert rule.require_auth is False

    def test_unknown_path(self):
        assert self.table.match("/nao/existe") is None

    def test_first_declared_rule_wins(self):
        table = RouteTable(
            [
                RouteRule(pattern="/agendar/novo", allowed_roles=frozenset({Role.CLIENT})),
                RouteRule(pattern="/agendar/:slug", require_auth=False),
            ]
        )

        assert table.match("/agendar/novo").allowed_roles == frozenset({Role.CLIENT})
        assert table.match("/agendar/outro").require_auth is False

    def test_default_table_size(self):
        assert len(self.table) == len(DEFAULT_ROUTES)
