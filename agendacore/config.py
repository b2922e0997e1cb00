"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.roles import Role
from .domain.routes import DEFAULT_ROUTES, RouteRule, RouteTable

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RouteConfig(BaseModel):
    """One guarded route."""
    pattern: str
    allowed_roles: Optional[List[Role]] = None
    require_auth: bool = True
    name: str = ""

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        """Patterns are absolute paths."""
        if not value.startswith("/"):
            raise ValueError(f"Route pattern must start with '/', got {value!r}")
        return value

    def to_rule(self) -> RouteRule:
        roles = frozenset(self.allowed_roles) if self.allowed_roles is not None else None
        return RouteRule(
            pattern=self.pattern,
            allowed_roles=roles,
            require_auth=self.require_auth,
            name=self.name,
        )

    @classmethod
    def from_rule(cls, rule: RouteRule) -> "RouteConfig":
        roles = sorted(rule.allowed_roles, key=lambda r: r.value) if rule.allowed_roles is not None else None
        return cls(
            pattern=rule.pattern,
            allowed_roles=roles,
            require_auth=rule.require_auth,
            name=rule.name,
        )


def _default_routes() -> List[RouteConfig]:
    return [RouteConfig.from_rule(rule) for rule in DEFAULT_ROUTES]


class AppConfig(BaseModel):
    """Application configuration."""
    data_file: Path = Path("schedules.json")
    log_level: str = "WARNING"
    routes: List[RouteConfig] = Field(default_factory=_default_routes)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names, case-insensitive."""
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("routes")
    @classmethod
    def validate_routes(cls, value: List[RouteConfig]) -> List[RouteConfig]:
        """Ensure each pattern is declared once."""
        seen: set[str] = set()
        for route in value:
            key = route.pattern.rstrip("/") or "/"
            if key in seen:
                raise ValueError(f"Duplicate route pattern detected: {route.pattern}")
            seen.add(key)
        return value

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def route_table(self) -> RouteTable:
        """Build the route table used by the access service."""
        return RouteTable(route.to_rule() for route in self.routes)

    def resolve_data_file(self, base_dir: Path) -> Path:
        """Relative data paths are taken relative to the config file's directory."""
        if self.data_file.is_absolute():
            return self.data_file
        return base_dir / self.data_file

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Path) -> "AppConfig":
        """Like ``load_from_yaml`` but a missing file yields the defaults."""
        if not config_path.exists():
            return cls()
        return cls.load_from_yaml(config_path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
