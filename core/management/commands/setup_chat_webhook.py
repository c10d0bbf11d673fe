"""Register the engine's Telegram webhook with the Bot API."""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions.notification_exceptions import TransportError
from core.services.engine import get_engine

WEBHOOK_PATH = "/api/v1/notification/chat/webhook"


class Command(BaseCommand):
    help = "Point the Telegram bot's webhook at this deployment"

    def add_arguments(self, parser):
        parser.add_argument(
            "public_url",
            help="Public base URL of the engine, e.g. https://notify.worktrac.com",
        )

    def handle(self, *args, **options):
        public_url = options["public_url"].rstrip("/")
        if not public_url.startswith("https://"):
            raise CommandError("Telegram requires an https:// webhook URL")

        engine = get_engine()
        if not engine.config.chat_enabled:
            raise CommandError("TELEGRAM_BOT_TOKEN is not configured")

        webhook_url = f"{public_url}{WEBHOOK_PATH}"
        try:
            engine.telegram.set_webhook(
                webhook_url, secret_token=engine.config.telegram_webhook_secret or None
            )
        except TransportError as e:
            raise CommandError(f"Webhook registration failed: {e.message}") from e

        self.stdout.write(self.style.SUCCESS(f"Webhook registered: {webhook_url}"))
