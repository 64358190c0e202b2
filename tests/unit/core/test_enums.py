"""Unit tests for notification enumerations."""

import unittest

from core.enums import (
    DISPLAY_CATEGORIES,
    ConnectionRequestStatus,
    NotificationCategory,
)


class TestNotificationCategory(unittest.TestCase):
    """Test cases for NotificationCategory."""

    def test_display_order(self):
        """Test the fixed tab order of the display categories."""
        self.assertEqual(
            DISPLAY_CATEGORIES,
            (
                "connections",
                "sports",
                "exams",
                "events",
                "clubs",
                "placements",
                "celebrations",
            ),
        )

    def test_from_name_is_case_insensitive(self):
        """Test the case-insensitive lookup."""
        self.assertIs(NotificationCategory.from_name("Sports"), NotificationCategory.SPORTS)
        self.assertIs(
            NotificationCategory.from_name(" PLACEMENTS "),
            NotificationCategory.PLACEMENTS,
        )

    def test_from_name_unknown_returns_none(self):
        """Test the lookup of a category outside the display set."""
        self.assertIsNone(NotificationCategory.from_name("misc"))


class TestConnectionRequestStatus(unittest.TestCase):
    """Test cases for ConnectionRequestStatus transitions."""

    def test_pending_moves_to_either_terminal_state(self):
        """Test the allowed transitions."""
        pending = ConnectionRequestStatus.PENDING

        self.assertTrue(pending.can_transition_to(ConnectionRequestStatus.ACCEPTED))
        self.assertTrue(pending.can_transition_to(ConnectionRequestStatus.REJECTED))
        self.assertFalse(pending.can_transition_to(ConnectionRequestStatus.PENDING))

    def test_terminal_states_are_final(self):
        """Test that accepted and rejected allow no transition."""
        for status in (ConnectionRequestStatus.ACCEPTED, ConnectionRequestStatus.REJECTED):
            self.assertTrue(status.is_terminal)
            for target in ConnectionRequestStatus:
                self.assertFalse(status.can_transition_to(target))


if __name__ == "__main__":
    unittest.main()
