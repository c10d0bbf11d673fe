#!/usr/bin/env python
"""Script to run the Django development server for the notification engine."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the Django development server.

    Uses the 'runlocal' command so the engine starts without a database
    connection; the readiness probe then reports degraded.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notification_engine.settings")
    port = os.getenv("PORT", "8000")
    execute_from_command_line([sys.argv[0], "runlocal", f"0.0.0.0:{port}"])


if __name__ == "__main__":
    main()
