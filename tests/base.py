"""Base test classes for component tests."""

from unittest.mock import patch
from uuid import UUID, uuid4

from django.test import Client, TestCase

from core.auth.oauth2 import OAuth2User
from core.constants import ADMIN_SCOPE, USER_SCOPE
from tests.factories import create_user

API_PREFIX = "/api/v1/notification"


class BaseComponentTest(TestCase):
    """Base class for component tests.

    Requests go through the full Django/DRF stack against the SQLite test
    database; only token validation is replaced. ``self.user`` is a real
    user row and the default caller.
    """

    def setUp(self):
        """Set up the client, a user and the authentication patch."""
        self.client = Client()
        self.user = create_user()
        self.user_id: UUID = self.user.user_id

        patcher = patch("core.auth.oauth2.OAuth2Authentication.authenticate")
        self.mock_authenticate = patcher.start()
        self.addCleanup(patcher.stop)
        self.authenticate()

    def authenticate(self, scopes=(USER_SCOPE,), user_id=None):
        """Make subsequent requests carry a token with ``scopes``."""
        caller = OAuth2User(
            user_id=str(user_id or self.user_id),
            client_id="test-client",
            scopes=list(scopes),
        )
        self.mock_authenticate.return_value = (caller, None)
        return caller

    def authenticate_admin(self, user_id=None):
        return self.authenticate(scopes=(ADMIN_SCOPE,), user_id=user_id or uuid4())

    def url(self, path: str) -> str:
        return f"{API_PREFIX}/{path.lstrip('/')}"

    def post_json(self, path, body=None, **extra):
        return self.client.post(
            self.url(path), data=body or {}, content_type="application/json", **extra
        )

    def put_json(self, path, body=None):
        return self.client.put(
            self.url(path), data=body or {}, content_type="application/json"
        )
