from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Authorization tier of a user account."""

    ADMIN = "Admin"
    AMIN = "Amin"
    KHADEM = "Khadem"
    PENDING = "Pending"
    GUEST = "Guest"

    @property
    def is_approved(self) -> bool:
        return self in {Role.ADMIN, Role.AMIN, Role.KHADEM}


# Roles allowed to manage classes, children and events.
STAFF_ROLES = frozenset({Role.ADMIN, Role.AMIN})
# Roles allowed to scan and record scores.
SCANNER_ROLES = frozenset({Role.ADMIN, Role.AMIN, Role.KHADEM})


class EventType(str, Enum):
    SERVICE = "service"
    CAMP = "camp"
    ACTIVITY = "activity"


class EventStatus(str, Enum):
    """Lifecycle of an event, as shown on the events screen."""

    DRAFT = "draft"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
