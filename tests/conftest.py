"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "notification_engine.settings_test")
django.setup()

from core.services.engine import reset_engine  # noqa: E402


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture(autouse=True)
def fresh_engine():
    """Rebuild the engine from the current settings for every test."""
    reset_engine()
    yield
    reset_engine()
