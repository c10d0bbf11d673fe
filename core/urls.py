"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    ChatDisconnectView,
    ChatStatusView,
    ChatTestMessageView,
    ChatVerificationCodeView,
    ChatWebhookView,
    CommentAddedView,
    DispatchEventView,
    LivenessCheckView,
    MarkAllReadView,
    MarkNotificationReadView,
    NotificationPreferencesView,
    PushSendView,
    PushSubscriptionView,
    ReadinessCheckView,
    TaskAssignedView,
    TaskCompletedView,
    TaskInvitationView,
    TaskReviewedView,
    UnreadCountView,
    UserNotificationListView,
    WorkspaceInvitationView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Domain event endpoints
    path(
        "notifications/task-assigned",
        TaskAssignedView.as_view(),
        name="task-assigned",
    ),
    path(
        "notifications/task-completed",
        TaskCompletedView.as_view(),
        name="task-completed",
    ),
    path(
        "notifications/task-reviewed",
        TaskReviewedView.as_view(),
        name="task-reviewed",
    ),
    path(
        "notifications/comment-added",
        CommentAddedView.as_view(),
        name="comment-added",
    ),
    path(
        "notifications/task-invitation",
        TaskInvitationView.as_view(),
        name="task-invitation",
    ),
    path(
        "notifications/workspace-invitation",
        WorkspaceInvitationView.as_view(),
        name="workspace-invitation",
    ),
    path(
        "notifications/dispatch",
        DispatchEventView.as_view(),
        name="dispatch-event",
    ),
    # User notification endpoints (specific routes before generic)
    path(
        "users/me/notifications/unread-count",
        UnreadCountView.as_view(),
        name="unread-count",
    ),
    path(
        "users/me/notifications/read-all",
        MarkAllReadView.as_view(),
        name="mark-all-read",
    ),
    path(
        "users/me/notifications/<uuid:notification_id>/read",
        MarkNotificationReadView.as_view(),
        name="mark-notification-read",
    ),
    path(
        "users/me/notifications",
        UserNotificationListView.as_view(),
        name="user-notifications",
    ),
    path(
        "users/me/preferences",
        NotificationPreferencesView.as_view(),
        name="notification-preferences",
    ),
    # Push endpoints
    path(
        "users/me/push-subscription",
        PushSubscriptionView.as_view(),
        name="push-subscription",
    ),
    path("push/send", PushSendView.as_view(), name="push-send"),
    # Chat endpoints
    path("chat/status", ChatStatusView.as_view(), name="chat-status"),
    path(
        "chat/verification-code",
        ChatVerificationCodeView.as_view(),
        name="chat-verification-code",
    ),
    path("chat/disconnect", ChatDisconnectView.as_view(), name="chat-disconnect"),
    path("chat/test", ChatTestMessageView.as_view(), name="chat-test"),
    path("chat/webhook", ChatWebhookView.as_view(), name="chat-webhook"),
]
