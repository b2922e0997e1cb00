"""
Tests for configuration loading.
"""

import logging
from pathlib import Path

import pytest

from agendacore.config import AppConfig
from agendacore.domain.roles import Role
from agendacore.domain.routes import DEFAULT_ROUTES


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.data_file == Path("schedules.json")
        assert config.logging_level == logging.WARNING
        assert len(config.route_table()) == len(DEFAULT_ROUTES)

    def test_default_routes_round_trip(self):
        """Route configs rebuilt from defaults guard the same way."""
        table = AppConfig().route_table()

        assert table.match("/admin/planos").allowed_roles == frozenset({Role.SAAS_ADMIN})
        assert table.match("/login").require_auth is False

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "data_file: data/horarios.json\n"
            "log_level: debug\n"
            "routes:\n"
            "  - pattern: /negocio/lojas\n"
            "    allowed_roles: [business_owner, saas_admin]\n"
            "  - pattern: /\n"
            "    require_auth: false\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.log_level == "DEBUG"
        assert config.resolve_data_file(tmp_path) == tmp_path / "data" / "horarios.json"
        rule = config.route_table().match("/negocio/lojas")
        assert rule.allowed_roles == frozenset({Role.BUSINESS_OWNER, Role.SAAS_ADMIN})
        assert config.route_table().match("/admin/dashboard") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_load_or_default_missing_file(self, tmp_path):
        assert AppConfig.load_or_default(tmp_path / "missing.yaml") == AppConfig()

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("routes: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_root_must_be_mapping(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(config_path)

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            AppConfig(routes=[{"pattern": "/x", "allowed_roles": ["admin"]}])

    def test_duplicate_route_rejected(self):
        with pytest.raises(ValueError, match="Duplicate route"):
            AppConfig(routes=[{"pattern": "/x"}, {"pattern": "/x/"}])

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            AppConfig(log_level="verbose")

    def test_relative_pattern_rejected(self):
        with pytest.raises(ValueError):
            AppConfig(routes=[{"pattern": "x"}])
