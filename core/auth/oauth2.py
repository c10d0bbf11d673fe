"""OAuth2 authentication backend for Django REST Framework.

Supports two validation modes:
1. Token Introspection: Validates tokens by calling auth-service
2. Local JWT Validation: Validates JWT signatures locally using shared secret
"""

from typing import Any, cast
from uuid import UUID

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from core.constants import ADMIN_SCOPE, USER_SCOPE

logger = structlog.get_logger(__name__)


class OAuth2User:
    """Container for token claims of an authenticated caller.

    Not a Django User model. ``user_id`` is the token subject, which is the
    client id for client_credentials tokens issued to other services.
    """

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        """Initialize OAuth2 user.

        Args:
            user_id: User ID from token (or client_id for client_credentials)
            client_id: OAuth2 client ID
            scopes: List of granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Check if user has a specific scope."""
        return scope in self.scopes

    @property
    def is_admin(self) -> bool:
        """Whether the caller may act on behalf of other users."""
        return self.has_scope(ADMIN_SCOPE)

    @property
    def can_use_notifications(self) -> bool:
        """Whether the caller holds any notification scope."""
        return self.has_scope(USER_SCOPE) or self.is_admin

    @property
    def user_uuid(self) -> UUID | None:
        """Token subject as a UUID, or None for non-user subjects."""
        try:
            return UUID(str(self.user_id))
        except ValueError:
            return None

    def __str__(self):
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


def _normalize_scopes(token_data: dict[str, Any]) -> list[str]:
    """Read scopes from either a ``scopes`` list or an RFC 7662 ``scope`` string."""
    scopes = token_data.get("scopes")
    if scopes is None:
        scopes = token_data.get("scope", "")
    if isinstance(scopes, str):
        return scopes.split()
    return list(scopes)


class OAuth2Authentication(authentication.BaseAuthentication):
    """OAuth2 Bearer token authentication.

    Extracts and validates Bearer tokens from Authorization header.
    """

    def authenticate(self, request):
        """Authenticate the request using OAuth2 Bearer token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, auth) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]

        if settings.OAUTH2_INTROSPECTION_ENABLED:
            token_data = self._validate_via_introspection(token)
        else:
            token_data = self._validate_via_jwt(token)

        user = OAuth2User(
            user_id=token_data.get("sub") or token_data.get("client_id", "unknown"),
            client_id=token_data.get("client_id", "unknown"),
            scopes=_normalize_scopes(token_data),
        )

        return (user, token)

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Validate token via auth-service introspection endpoint.

        Active results are cached for OAUTH2_TOKEN_CACHE_TTL seconds.

        Raises:
            AuthenticationFailed: If token is invalid or the service is down
        """
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{token[:16]}"
        cached_data = cache.get(cache_key)
        if cached_data:
            return cast("dict[str, Any]", cached_data)

        try:
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={"token": token, "token_type_hint": "access_token"},
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("token_introspection_unavailable", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "token_introspection_failed", status_code=response.status_code
            )
            raise exceptions.AuthenticationFailed("Token introspection failed")

        data = response.json()
        if not data.get("active", False):
            raise exceptions.AuthenticationFailed("Token is not active")

        cache.set(cache_key, data, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)
        return cast("dict[str, Any]", data)

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate token locally by verifying the JWT signature.

        Raises:
            AuthenticationFailed: If token is invalid
        """
        if not settings.JWT_SECRET:
            logger.error("JWT_SECRET not configured but local validation is enabled")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256", "HS384", "HS512"],
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_nbf": True,
                },
            )
        except jwt.ExpiredSignatureError as e:
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("invalid_jwt", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type")
        if token_type != "access_token":
            logger.warning("invalid_token_type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return {
            "active": True,
            "sub": payload.get("sub"),
            "client_id": payload.get("client_id"),
            "scopes": payload.get("scopes", payload.get("scope", [])),
            "exp": payload.get("exp"),
        }

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
