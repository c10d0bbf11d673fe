"""Clients for external HTTP APIs the engine calls."""

from core.services.downstream.telegram_client import TelegramBotClient

__all__ = ["TelegramBotClient"]
