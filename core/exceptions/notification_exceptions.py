"""Domain exceptions raised by the notification engine."""

from typing import Any


class NotificationEngineError(Exception):
    """Base exception for notification engine errors."""

    status_code = 500

    def __init__(self, message: str, detail: Any = None):
        """Initialize engine error.

        Args:
            message: Human readable error message
            detail: Optional structured detail returned to API clients
        """
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(NotificationEngineError):
    """Input failed structural or enum validation (400)."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        """Initialize validation error.

        Args:
            message: Error message
            errors: Field-level errors, as produced by pydantic
        """
        self.errors = errors or []
        super().__init__(message, detail=self.errors or None)


class NotFoundError(NotificationEngineError):
    """Referenced record does not exist (404)."""

    status_code = 404


class RecipientNotFoundError(NotFoundError):
    """User not found in the platform's user table."""

    def __init__(self, user_id: Any):
        """Initialize recipient not found error.

        Args:
            user_id: ID of the user that was not found
        """
        self.user_id = user_id
        super().__init__(f"User with ID {user_id} not found")


class PushSubscriptionNotFoundError(NotFoundError):
    """User has no registered push subscription."""

    def __init__(self, user_id: Any):
        """Initialize push subscription not found error.

        Args:
            user_id: ID of the user without a subscription
        """
        self.user_id = user_id
        super().__init__(f"User {user_id} has no push subscription")


class NotificationNotFoundError(NotFoundError):
    """Notification missing or owned by another user."""

    def __init__(self, notification_id: Any):
        """Initialize notification not found error.

        Args:
            notification_id: ID of the notification that was not found
        """
        self.notification_id = notification_id
        super().__init__(f"Notification with ID {notification_id} not found")


class ChatLinkNotFoundError(NotFoundError):
    """User has no linked chat identity."""

    def __init__(self, user_id: Any):
        """Initialize chat link not found error.

        Args:
            user_id: ID of the user without a linked chat
        """
        self.user_id = user_id
        super().__init__(f"User {user_id} has not linked a chat account")


class TransportError(NotificationEngineError):
    """A channel transport could not deliver a message."""

    status_code = 500

    def __init__(
        self,
        message: str,
        channel: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize transport error.

        Args:
            message: Error message
            channel: Channel that failed
            status_code: Upstream HTTP status code if applicable
        """
        self.channel = channel
        self.upstream_status_code = status_code
        super().__init__(message)


class ExpiredOrInvalidCodeError(NotificationEngineError):
    """Verification code unknown, expired or already consumed."""

    status_code = 400

    def __init__(self) -> None:
        """Initialize with the single generic message."""
        super().__init__("Invalid or expired verification code")


class ConflictError(NotificationEngineError):
    """Operation conflicts with the current state (409)."""

    status_code = 409
