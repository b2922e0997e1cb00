"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .access_service import AccessService, Identity, IdentityProviderProtocol, Profile
from .schedule_service import OwnerKind, OwnerRef, ScheduleService, ScheduleStoreProtocol

__all__ = [
    "AccessService",
    "Identity",
    "IdentityProviderProtocol",
    "Profile",
    "OwnerKind",
    "OwnerRef",
    "ScheduleService",
    "ScheduleStoreProtocol",
]
