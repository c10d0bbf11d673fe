"""Unit tests for Django settings configuration."""

from django.conf import settings
from django.test import SimpleTestCase
from django.utils.module_loading import import_string

from core.config import ChannelConfig


class TestTestSettingsConfiguration(SimpleTestCase):
    """Test settings override the deployment settings."""

    def test_test_mode_flag_is_set(self):
        self.assertTrue(settings.TEST_MODE)

    def test_database_uses_in_memory_sqlite(self):
        db_config = settings.DATABASES["default"]

        self.assertEqual(db_config["ENGINE"], "django.db.backends.sqlite3")
        self.assertIn("memory", db_config["NAME"].lower())

    def test_cache_is_local_memory(self):
        self.assertEqual(
            settings.CACHES["default"]["BACKEND"],
            "django.core.cache.backends.locmem.LocMemCache",
        )

    def test_rq_jobs_run_synchronously(self):
        self.assertFalse(settings.RQ_QUEUES["default"]["ASYNC"])

    def test_dispatch_is_inline(self):
        self.assertFalse(settings.NOTIFICATION_DISPATCH_ASYNC)


class TestRestFrameworkSettings(SimpleTestCase):
    def test_oauth2_authentication_is_default(self):
        self.assertEqual(
            settings.REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"],
            ["core.auth.oauth2.OAuth2Authentication"],
        )

    def test_custom_exception_handler_is_registered(self):
        self.assertEqual(
            settings.REST_FRAMEWORK["EXCEPTION_HANDLER"],
            "core.exceptions.handlers.custom_exception_handler",
        )

    def test_request_id_middleware_runs_first(self):
        self.assertEqual(
            settings.MIDDLEWARE[0], "core.middleware.request_context.RequestIDMiddleware"
        )

    def test_engine_middleware_is_importable(self):
        engine_middleware = [
            path for path in settings.MIDDLEWARE if path.startswith("core.")
        ]

        self.assertEqual(
            engine_middleware,
            [
                "core.middleware.request_context.RequestIDMiddleware",
                "core.middleware.request_context.ProcessTimeMiddleware",
            ],
        )
        for path in engine_middleware:
            self.assertTrue(callable(import_string(path)))


class TestChannelSettings(SimpleTestCase):
    def test_channel_config_reads_test_settings(self):
        config = ChannelConfig.from_settings()

        self.assertTrue(config.chat_enabled)
        self.assertTrue(config.push_enabled)
        self.assertEqual(config.verification_code_ttl_minutes, 30)
        self.assertEqual(config.chat_message_max_length, 500)
