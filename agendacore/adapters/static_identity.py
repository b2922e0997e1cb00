"""
In-memory identity provider for the CLI and tests.
"""

from typing import Optional

from ..domain.roles import Role
from ..services.access_service import ANONYMOUS, Identity, Profile


class StaticIdentityProvider:
    """
    Identity source that holds a fixed session.

    Mirrors the lifecycle of a real session provider: it can start in the
    loading state, and profiles are set on sign-in and cleared on sign-out.
    """

    def __init__(self, profile: Optional[Profile] = None, loading: bool = False):
        self._profile = profile
        self._loading = loading

    @classmethod
    def anonymous(cls, loading: bool = False) -> "StaticIdentityProvider":
        return cls(profile=None, loading=loading)

    @classmethod
    def signed_in(
        cls,
        role: "Role | str | None",
        profile_id: str = "local-user",
        business_id: Optional[str] = None,
    ) -> "StaticIdentityProvider":
        return cls(profile=Profile(id=profile_id, role=role, business_id=business_id))

    @property
    def loading(self) -> bool:
        return self._loading

    def current_identity(self) -> Identity:
        if self._profile is None:
            return ANONYMOUS
        return Identity(authenticated=True, profile=self._profile)

    def sign_in(self, profile: Profile) -> None:
        self._profile = profile
        self._loading = False

    def sign_out(self) -> None:
        self._profile = None

    def finish_loading(self) -> None:
        self._loading = False
