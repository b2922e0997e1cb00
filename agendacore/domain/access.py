"""
Route guarding: decides whether a navigation renders, waits, or redirects.

Pure decision logic. Identity state comes in through ``RouteGuardRequest``;
nothing here reads global state or performs navigation itself.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from .roles import LOGIN_PATH, Role, role_home

logger = logging.getLogger(__name__)


class AccessAction(str, Enum):
    """What the router should do with a navigation."""
    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class AccessDecision:
    """
    Outcome of guarding a route.

    Redirects always replace the current history entry so that the back
    button never lands on the guarded page again.
    """
    action: AccessAction
    target: Optional[str] = None
    replace: bool = False

    @classmethod
    def loading(cls) -> "AccessDecision":
        return cls(action=AccessAction.LOADING)

    @classmethod
    def render(cls) -> "AccessDecision":
        return cls(action=AccessAction.RENDER)

    @classmethod
    def redirect(cls, target: str) -> "AccessDecision":
        return cls(action=AccessAction.REDIRECT, target=target, replace=True)

    @classmethod
    def not_found(cls) -> "AccessDecision":
        return cls(action=AccessAction.NOT_FOUND)

    @property
    def is_redirect(self) -> bool:
        return self.action is AccessAction.REDIRECT

    def describe(self) -> str:
        """Short human readable form, e.g. ``redirect -> /login``."""
        if self.is_redirect:
            return f"{self.action.value} -> {self.target}"
        return self.action.value


def _normalize_roles(roles: Optional[Iterable["Role | str"]]) -> Optional[FrozenSet[str]]:
    if roles is None:
        return None
    return frozenset(r.value if isinstance(r, Role) else str(r) for r in roles)


@dataclass(frozen=True)
class RouteGuardRequest:
    """
    Inputs for a single navigation.

    ``role`` may be a raw label that is not part of ``Role``; such roles
    still fail the allowed-roles check and are sent to the site root.
    ``allowed_roles=None`` means the route does not restrict roles.
    """
    is_authenticated: bool
    role: "Role | str | None" = None
    allowed_roles: Optional[FrozenSet[str]] = None
    require_auth: bool = True
    loading: bool = False

    @classmethod
    def build(
        cls,
        *,
        is_authenticated: bool,
        role: "Role | str | None" = None,
        allowed_roles: Optional[Iterable["Role | str"]] = None,
        require_auth: bool = True,
        loading: bool = False,
    ) -> "RouteGuardRequest":
        """Create a request, accepting any iterable of roles."""
        return cls(
            is_authenticated=is_authenticated,
            role=role,
            allowed_roles=_normalize_roles(allowed_roles),
            require_auth=require_auth,
            loading=loading,
        )

    @property
    def role_label(self) -> Optional[str]:
        if self.role is None:
            return None
        return self.role.value if isinstance(self.role, Role) else str(self.role)


class AccessResolver:
    """
    Evaluates guard rules in a fixed order; the first matching rule wins.

    1. identity still resolving  -> LOADING
    2. auth required, anonymous  -> redirect to /login
    3. role known but not allowed -> redirect to the role's home
    4. anything else             -> RENDER
    """

    def resolve(self, request: RouteGuardRequest) -> AccessDecision:
        decision = self._decide(request)
        logger.debug("Guard %s -> %s", request, decision.describe())
        return decision

    def _decide(self, request: RouteGuardRequest) -> AccessDecision:
        if request.loading:
            return AccessDecision.loading()

        if request.require_auth and not request.is_authenticated:
            return AccessDecision.redirect(LOGIN_PATH)

        role = request.role_label
        if request.allowed_roles and role is not None and role not in request.allowed_roles:
            return AccessDecision.redirect(role_home(role))

        return AccessDecision.render()
