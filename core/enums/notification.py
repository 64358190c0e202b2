"""Notification-related enumerations.

This module contains the fixed display categories of the notification feed
and the lifecycle states of a connection request.
"""

from enum import Enum


class NotificationCategory(str, Enum):
    """Display categories of the notification feed.

    The order of the members is the tab order shown to users. A notification
    whose category is not one of these is never shown in any tab.
    """

    CONNECTIONS = "connections"
    SPORTS = "sports"
    EXAMS = "exams"
    EVENTS = "events"
    CLUBS = "clubs"
    PLACEMENTS = "placements"
    CELEBRATIONS = "celebrations"

    @classmethod
    def from_name(cls, name: str) -> "NotificationCategory | None":
        """Look up a category case-insensitively.

        Args:
            name: Category name as supplied by a client or stored on a row

        Returns:
            Matching category, or None if the name is not a display category
        """
        normalized = name.strip().lower()
        for category in cls:
            if category.value == normalized:
                return category
        return None


class ConnectionRequestStatus(str, Enum):
    """Lifecycle states of a connection request.

    A request starts PENDING and moves exactly once to ACCEPTED or REJECTED.
    Both terminal states are final.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed from this state."""
        return self is not ConnectionRequestStatus.PENDING

    def can_transition_to(self, target: "ConnectionRequestStatus") -> bool:
        """Check whether moving from this state to ``target`` is allowed."""
        return self is ConnectionRequestStatus.PENDING and target.is_terminal


DISPLAY_CATEGORIES: tuple[str, ...] = tuple(c.value for c in NotificationCategory)
