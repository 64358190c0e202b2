"""Development server command that skips migration checks.

The campus feed service keeps all of its data in the hosted backend, so
there are no migrations to check and no local database to wait for.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """Runserver without migration checks."""

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks - the hosted backend owns the schema."""
        self.stdout.write(
            self.style.WARNING("Skipping migration checks (hosted backend owns schema)")
        )
