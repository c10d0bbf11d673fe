"""Development server command for the notification engine.

Starts without checking migrations so the engine can come up in degraded
mode while the shared database is unavailable.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """runserver without the migration check.

    The users table belongs to the task platform; the engine never runs
    migrations against it in production.
    """

    help = "Start the notification engine without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        self.stdout.write(
            self.style.WARNING("Skipping migration checks (shared database schema)")
        )
