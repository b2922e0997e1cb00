"""
Application service for guarding navigation.

The service reads identity state from an injected provider and delegates the
actual decision to the domain-level ``AccessResolver``. Keeping the identity
dependency behind a small protocol lets tests and the CLI plug in a static
provider instead of a real session backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from ..domain.access import AccessDecision, AccessResolver, RouteGuardRequest
from ..domain.roles import Role, role_home
from ..domain.routes import RouteTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """Profile row attached to an authenticated session."""
    id: str
    role: "Role | str | None"
    business_id: Optional[str] = None


@dataclass(frozen=True)
class Identity:
    """Current session as seen by the guard."""
    authenticated: bool
    profile: Optional[Profile] = None

    @property
    def role(self) -> "Role | str | None":
        return self.profile.role if self.profile else None


ANONYMOUS = Identity(authenticated=False)


class IdentityProviderProtocol(Protocol):
    """Protocol describing the identity source needed by the service."""

    @property
    def loading(self) -> bool:
        """True while the session or profile is still being resolved."""

    def current_identity(self) -> Identity:
        """Return the current identity (anonymous when signed out)."""


class AccessService:
    """
    Guards routes for the identity reported by the provider.

    Both ``guard`` and ``navigate`` are read-only: issuing the redirect is
    left to the caller's router.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        route_table: RouteTable | None = None,
        resolver: AccessResolver | None = None,
    ) -> None:
        self._identity_provider = identity_provider
        self._route_table = route_table or RouteTable()
        self._resolver = resolver or AccessResolver()

    @property
    def route_table(self) -> RouteTable:
        return self._route_table

    def guard(
        self,
        allowed_roles: Optional[Iterable["Role | str"]] = None,
        require_auth: bool = True,
    ) -> AccessDecision:
        """Decide what to do with content restricted to ``allowed_roles``."""
        request = self._build_request(allowed_roles, require_auth)
        return self._resolver.resolve(request)

    def navigate(self, path: str) -> AccessDecision:
        """Guard a concrete path using the route table."""
        rule = self._route_table.match(path)
        if rule is None:
            logger.info("No route matches %s", path)
            return AccessDecision.not_found()
        return self.guard(allowed_roles=rule.allowed_roles, require_auth=rule.require_auth)

    def post_login_redirect(self) -> Optional[str]:
        """
        Where to send a user right after signing in.

        None while the identity is loading, anonymous, or has no profile yet.
        """
        if self._identity_provider.loading:
            return None
        identity = self._identity_provider.current_identity()
        if not identity.authenticated or identity.profile is None:
            return None
        return role_home(identity.role)

    def _build_request(
        self,
        allowed_roles: Optional[Iterable["Role | str"]],
        require_auth: bool,
    ) -> RouteGuardRequest:
        if self._identity_provider.loading:
            return RouteGuardRequest.build(
                is_authenticated=False,
                allowed_roles=allowed_roles,
                require_auth=require_auth,
                loading=True,
            )

        identity = self._identity_provider.current_identity()
        return RouteGuardRequest.build(
            is_authenticated=identity.authenticated,
            role=identity.role,
            allowed_roles=allowed_roles,
            require_auth=require_auth,
        )
