"""API views for core application."""

import hmac
from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

import structlog
from pydantic import BaseModel, ValidationError
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.auth.oauth2 import OAuth2Authentication
from core.constants import TELEGRAM_SECRET_HEADER
from core.schemas.chat import DisconnectRequest
from core.schemas.events import (
    CommentAddedRequest,
    TaskAssignedRequest,
    TaskCompletedRequest,
    TaskInvitationRequest,
    TaskReviewedRequest,
    WorkspaceInvitationRequest,
)
from core.schemas.notification import (
    MarkAllReadResponse,
    NotificationEvent,
    UnreadCountResponse,
)
from core.schemas.preferences import NotificationPreferencesSchema
from core.schemas.push import PushSendRequest, PushSendResponse, PushSubscriptionRequest
from core.services.engine import get_engine
from core.services.health_service import health_service
from core.services.invitation_event_service import invitation_event_service
from core.services.task_event_service import task_event_service

logger = structlog.get_logger(__name__)


def _forbidden(detail: str) -> Response:
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": detail,
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _bad_request(e: ValidationError) -> Response:
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": e.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class NotificationAPIView(APIView):
    """Base view for endpoints requiring a notification scope.

    Requires notification:user or notification:admin scope. Admin callers
    may act on behalf of other users where a view allows it.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def scope_error(self, request) -> Response | None:
        """Return a 403 response when the caller lacks a notification scope."""
        if request.user.can_use_notifications:
            return None
        logger.warning(
            "missing_notification_scope",
            user_id=request.user.user_id,
            scopes=request.user.scopes,
        )
        return _forbidden("Requires notification:user or notification:admin scope")

    def target_user(self, request, requested: UUID | None = None) -> UUID | None:
        """Resolve the user a request acts for.

        Returns None when the caller may not act for ``requested``, or when
        no user is given and the token does not belong to a user.
        """
        own_id = request.user.user_uuid
        if requested is None or requested == own_id:
            return own_id
        if request.user.is_admin:
            return requested
        logger.warning(
            "cross_user_access_denied",
            user_id=request.user.user_id,
            requested_user_id=str(requested),
        )
        return None

    def parse_body(self, request, model: type[BaseModel]) -> BaseModel:
        """Validate the JSON body against ``model``.

        Raises:
            pydantic.ValidationError: If the body does not match
        """
        data = request.data if isinstance(request.data, dict) else {}
        return model.model_validate(data)


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.

    This endpoint is exempt from authentication to allow Kubernetes probes.
    """

    authentication_classes: list = []
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns degraded status (200 OK) when the database or Redis is
    unavailable, allowing the service to stay alive while they recover.

    This endpoint is exempt from authentication to allow Kubernetes probes.
    """

    authentication_classes: list = []
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status(get_engine().config)
        return Response(readiness.model_dump(mode="json"), status=status.HTTP_200_OK)


class DomainEventView(NotificationAPIView, ABC):
    """Base view for the task and invitation event endpoints.

    Subclasses name their request model and turn it into notification events;
    the engine dispatches them inline (200) or queues them (202).
    """

    request_model: type[BaseModel]

    @abstractmethod
    def build_events(self, body: Any) -> list[NotificationEvent]:
        """Turn a validated request body into notification events."""

    def post(self, request):
        """Handle POST request for a domain event.

        Returns:
            200 OK with the dispatch outcomes when dispatched inline
            202 Accepted with job ids when queued
            400 Bad Request if validation fails
            401 Unauthorized if authentication fails
            403 Forbidden if user lacks required scope
        """
        logger.info(
            "domain_event_received",
            request_model=self.request_model.__name__,
            user_id=request.user.user_id if request.user else None,
        )

        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden

        try:
            body = self.parse_body(request, self.request_model)
        except ValidationError as e:
            logger.warning(
                "invalid_domain_event",
                request_model=self.request_model.__name__,
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _bad_request(e)

        submission = get_engine().submit(self.build_events(body))
        return Response(
            submission.to_api(),
            status=status.HTTP_202_ACCEPTED if submission.queued else status.HTTP_200_OK,
        )


class TaskAssignedView(DomainEventView):
    """Notifies new assignees of a task."""

    request_model = TaskAssignedRequest

    def build_events(self, body):
        return task_event_service.task_assigned(body)


class TaskCompletedView(DomainEventView):
    """Notifies approvers, or the creator, that a task was completed."""

    request_model = TaskCompletedRequest

    def build_events(self, body):
        return task_event_service.task_completed(body)


class TaskReviewedView(DomainEventView):
    """Notifies assignees that their task was approved or rejected."""

    request_model = TaskReviewedRequest

    def build_events(self, body):
        return task_event_service.task_reviewed(body)


class CommentAddedView(DomainEventView):
    """Notifies assignees and the creator of a new comment."""

    request_model = CommentAddedRequest

    def build_events(self, body):
        return task_event_service.comment_added(body)


class TaskInvitationView(DomainEventView):
    """Notifies the invitee of a task invitation, or the inviter of the answer."""

    request_model = TaskInvitationRequest

    def build_events(self, body):
        return invitation_event_service.task_invitation(body)


class WorkspaceInvitationView(DomainEventView):
    """Notifies the invitee of a workspace invitation, or the inviter of the answer."""

    request_model = WorkspaceInvitationRequest

    def build_events(self, body):
        return invitation_event_service.workspace_invitation(body)


class DispatchEventView(DomainEventView):
    """Dispatches a raw notification event. Requires notification:admin scope."""

    request_model = NotificationEvent

    def scope_error(self, request) -> Response | None:
        if request.user.is_admin:
            return None
        logger.warning(
            "missing_admin_scope",
            user_id=request.user.user_id,
            scopes=request.user.scopes,
        )
        return _forbidden("Requires notification:admin scope")

    def build_events(self, body):
        return [body]


class UserNotificationListView(NotificationAPIView):
    """API endpoint for retrieving the authenticated user's notifications."""

    def get(self, request):
        """Retrieve one page of notifications, newest first.

        Query parameters:
        - cursor: next_cursor of the previous page (optional)
        - page_size: Items per page (default: 20, clamped to 1..100)
        - unread_only: Only unread notifications (default: false)

        Returns:
            200 OK with a NotificationPage
            400 Bad Request for a malformed cursor or page size
        """
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        page_size_param = request.query_params.get("page_size")
        try:
            page_size = int(page_size_param) if page_size_param else None
        except ValueError:
            return Response(
                {
                    "error": "bad_request",
                    "message": "Invalid page_size",
                    "detail": "page_size must be an integer",
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        unread_only = request.query_params.get("unread_only", "false").lower() == "true"

        page = get_engine().read_model.list(
            user_id,
            cursor=request.query_params.get("cursor") or None,
            page_size=page_size,
            unread_only=unread_only,
        )
        logger.info(
            "user_notifications_listed",
            user_id=str(user_id),
            count=len(page.notifications),
            has_more=page.has_more,
        )
        return Response(page.to_api(), status=status.HTTP_200_OK)


class UnreadCountView(NotificationAPIView):
    def get(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        count = get_engine().read_model.unread_count(user_id)
        return Response(
            UnreadCountResponse(unread_count=count).to_api(), status=status.HTTP_200_OK
        )


class MarkNotificationReadView(NotificationAPIView):
    def post(self, request, notification_id):
        """Mark one notification read; repeating the call is harmless.

        Returns:
            204 No Content on success
            404 Not Found if the notification is not the caller's
        """
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        get_engine().read_model.mark_read(user_id, notification_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MarkAllReadView(NotificationAPIView):
    def post(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        updated = get_engine().read_model.mark_all_read(user_id)
        return Response(
            MarkAllReadResponse(updated_count=updated).to_api(),
            status=status.HTTP_200_OK,
        )


class NotificationPreferencesView(NotificationAPIView):
    """GET returns the caller's preferences; PUT replaces all six selectors."""

    def get(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        preferences = get_engine().preferences.get_preferences(user_id)
        return Response(preferences.to_api(), status=status.HTTP_200_OK)

    def put(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        try:
            preferences = self.parse_body(request, NotificationPreferencesSchema)
        except ValidationError as e:
            return _bad_request(e)

        stored = get_engine().preferences.set_preferences(user_id, preferences)
        return Response(stored.to_api(), status=status.HTTP_200_OK)


class PushSubscriptionView(NotificationAPIView):
    """PUT registers the browser's push subscription; DELETE removes it."""

    def put(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        try:
            subscription = self.parse_body(request, PushSubscriptionRequest)
        except ValidationError as e:
            return _bad_request(e)

        get_engine().push.register(user_id, subscription)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def delete(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        get_engine().push.unregister(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PushSendView(NotificationAPIView):
    """Sends one push message to one user, without an in-app record."""

    def post(self, request):
        """Handle POST request to send a push message.

        Returns:
            200 OK with {success: true}
            400 Bad Request if validation fails
            403 Forbidden when sending to another user without admin scope
            404 Not Found if the user has no push subscription
            500 Internal Server Error if the push service rejected the send
        """
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden

        try:
            push_request = self.parse_body(request, PushSendRequest)
        except ValidationError as e:
            return _bad_request(e)

        if self.target_user(request, push_request.user_id) is None:
            return _forbidden("Requires notification:admin scope")

        get_engine().push.send(push_request)
        return Response(
            PushSendResponse(success=True, message="Push notification sent").to_api(),
            status=status.HTTP_200_OK,
        )


class ChatStatusView(NotificationAPIView):
    def get(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        link_status = get_engine().chat_links.get_status(user_id)
        return Response(link_status.to_api(), status=status.HTTP_200_OK)


class ChatVerificationCodeView(NotificationAPIView):
    """Issues a verification code the user sends to the bot."""

    def post(self, request):
        """Handle POST request to issue a verification code.

        Returns:
            201 Created with the code and its expiry
            404 Not Found if the user does not exist
            409 Conflict if no free code could be found
        """
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        issued = get_engine().chat_links.issue_code(user_id)
        return Response(issued.to_api(), status=status.HTTP_201_CREATED)


class ChatDisconnectView(NotificationAPIView):
    def post(self, request):
        """Unlink the user's chat; unlinked users succeed too.

        Returns:
            200 OK with {success: true}
            400 Bad Request if userId is missing or malformed
            403 Forbidden when disconnecting another user without admin scope
        """
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden

        try:
            disconnect = self.parse_body(request, DisconnectRequest)
        except ValidationError as e:
            return _bad_request(e)

        user_id = self.target_user(request, disconnect.user_id)
        if user_id is None:
            return _forbidden("Requires notification:admin scope")

        get_engine().chat_links.disconnect(user_id)
        return Response({"success": True}, status=status.HTTP_200_OK)


class ChatTestMessageView(NotificationAPIView):
    def post(self, request):
        forbidden = self.scope_error(request)
        if forbidden:
            return forbidden
        user_id = self.target_user(request)
        if user_id is None:
            return _forbidden("Requires a user access token")

        get_engine().chat_links.send_test_message(user_id)
        return Response({"success": True}, status=status.HTTP_200_OK)


class ChatWebhookView(APIView):
    """Receives Telegram updates.

    Authenticated by the webhook secret token, not OAuth2. Answers 200 for
    every accepted update so Telegram does not redeliver it.
    """

    authentication_classes: list = []
    permission_classes = (AllowAny,)

    def post(self, request):
        secret = get_engine().config.telegram_webhook_secret
        if secret:
            provided = request.headers.get(TELEGRAM_SECRET_HEADER, "")
            if not hmac.compare_digest(provided.encode(), secret.encode()):
                logger.warning("chat_webhook_secret_mismatch")
                return _forbidden("Invalid webhook secret token")

        try:
            payload = request.data if isinstance(request.data, dict) else {}
        except ParseError:
            logger.warning("chat_webhook_unparseable_body")
            payload = {}

        get_engine().chat_webhook.handle_update(payload)
        return Response({"status": "ok"}, status=status.HTTP_200_OK)
