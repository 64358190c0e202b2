#!/usr/bin/env python
"""Script to run the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    Uses the custom 'runlocal' command that skips migration checks,
    since the service keeps no schema of its own.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campus_feed.settings")
    execute_from_command_line([sys.argv[0], "runlocal", os.getenv("PORT", "8000")])


if __name__ == "__main__":
    main()
