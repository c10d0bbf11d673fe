"""Production server startup script for the notification engine.

Starts the Django application under Gunicorn for container deployments.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def build_gunicorn_argv() -> list[str]:
    """Build the Gunicorn command line from the environment.

    Each worker owns its own dispatch thread pool, so the worker count and
    NOTIFICATION_MAX_CONCURRENT_SENDS together bound outbound concurrency.

    Returns:
        The argv list Gunicorn is launched with.
    """
    port = os.getenv("PORT", "8000")
    return [
        "gunicorn",
        "notification_engine.wsgi:application",
        "--bind",
        f"0.0.0.0:{port}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "4"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "2"),
        "--timeout",
        os.getenv("GUNICORN_TIMEOUT", "60"),
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]


def main():
    """Start the notification engine using Gunicorn."""
    sys.argv = build_gunicorn_argv()
    run()


if __name__ == "__main__":
    main()
