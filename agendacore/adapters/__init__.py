"""
Adapters layer - Storage and identity integrations.
"""

from .json_schedule_store import JsonScheduleStore
from .static_identity import StaticIdentityProvider

__all__ = ["JsonScheduleStore", "StaticIdentityProvider"]
