"""
Application service tying weekly availability to its storage.

Each owning entity (store, professional or business) has exactly one stored
schedule. Every edit made through an opened ``WeeklyAvailability`` writes the
whole schedule back; there is no partial update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol

from ..domain.availability import WeeklyAvailability, initial_schedule
from ..domain.models import WeeklySchedule

logger = logging.getLogger(__name__)


class OwnerKind(str, Enum):
    """Entities that own a weekly schedule."""
    STORE = "store"
    PROFESSIONAL = "professional"
    BUSINESS = "business"


@dataclass(frozen=True)
class OwnerRef:
    """Reference to a schedule owner, written ``kind:id`` (e.g. ``store:42``)."""
    kind: OwnerKind
    id: str

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.id}"

    @classmethod
    def parse(cls, text: str) -> "OwnerRef":
        """
        Parse ``kind:id``.

        Raises:
            ValueError: If the kind is unknown or the id is empty
        """
        kind, sep, owner_id = text.partition(":")
        if not sep or not owner_id.strip():
            raise ValueError(f"Owner must look like 'store:42', got {text!r}")
        try:
            owner_kind = OwnerKind(kind.strip().lower())
        except ValueError:
            kinds = ", ".join(k.value for k in OwnerKind)
            raise ValueError(f"Unknown owner kind {kind!r}. Use one of: {kinds}") from None
        return cls(kind=owner_kind, id=owner_id.strip())

    def __str__(self) -> str:
        return self.key


class ScheduleStoreProtocol(Protocol):
    """Protocol describing the persistence needed by the service."""

    def load(self, owner: OwnerRef) -> Optional[Any]:
        """Return whatever was last saved for ``owner``, or None."""

    def save(self, owner: OwnerRef, payload: List[dict]) -> None:
        """Replace the stored schedule for ``owner``."""

    def delete(self, owner: OwnerRef) -> None:
        """Forget the stored schedule for ``owner``."""


class ScheduleService:
    """Opens editable schedules and persists every change."""

    def __init__(self, store: ScheduleStoreProtocol) -> None:
        self._store = store

    def load(self, owner: OwnerRef) -> WeeklySchedule:
        """Stored schedule for ``owner``, or the default template."""
        return initial_schedule(self._store.load(owner))

    def open(self, owner: OwnerRef) -> WeeklyAvailability:
        """Editable availability whose changes are saved for ``owner``."""

        def persist(schedule: WeeklySchedule) -> None:
            logger.debug("Saving schedule for %s", owner)
            self._store.save(owner, schedule.to_payload())

        return WeeklyAvailability(self._store.load(owner), on_change=persist)

    def save(self, owner: OwnerRef, schedule: WeeklySchedule) -> None:
        self._store.save(owner, schedule.to_payload())

    def delete(self, owner: OwnerRef) -> None:
        """Drop the schedule together with its owning entity."""
        logger.info("Deleting schedule for %s", owner)
        self._store.delete(owner)
