"""
Domain layer - Pure business logic without external dependencies.
"""

from .access import AccessAction, AccessDecision, AccessResolver, RouteGuardRequest
from .availability import WeeklyAvailability
from .models import DaySchedule, TimeSlot, WeeklySchedule
from .roles import Role, role_home
from .routes import DEFAULT_ROUTES, RouteRule, RouteTable

__all__ = [
    "AccessAction",
    "AccessDecision",
    "AccessResolver",
    "RouteGuardRequest",
    "WeeklyAvailability",
    "DaySchedule",
    "TimeSlot",
    "WeeklySchedule",
    "Role",
    "role_home",
    "DEFAULT_ROUTES",
    "RouteRule",
    "RouteTable",
]
