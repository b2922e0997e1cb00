"""
Roles known to the platform and the dashboard each one lands on.
"""

from enum import Enum
from typing import Dict


class Role(str, Enum):
    """Closed set of roles an identity can hold."""
    SAAS_ADMIN = "saas_admin"
    BUSINESS_OWNER = "business_owner"
    PROFESSIONAL = "professional"
    CLIENT = "client"


FALLBACK_PATH = "/"
LOGIN_PATH = "/login"

ROLE_HOME: Dict[Role, str] = {
    Role.SAAS_ADMIN: "/admin/dashboard",
    Role.BUSINESS_OWNER: "/negocio/dashboard",
    Role.PROFESSIONAL: "/profissional/dashboard",
    Role.CLIENT: FALLBACK_PATH,  # no dedicated dashboard
}


def parse_role(value: "Role | str | None") -> Role | None:
    """Return the matching Role, or None for missing or unrecognized labels."""
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def role_home(role: "Role | str | None") -> str:
    """Landing path for a role. Unknown or missing roles go to the site root."""
    parsed = parse_role(role)
    if parsed is None:
        return FALLBACK_PATH
    return ROLE_HOME[parsed]
