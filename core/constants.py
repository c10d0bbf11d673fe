"""Constants used throughout the notification engine."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
TELEGRAM_SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # Log requests slower than 1 second

# Scopes
USER_SCOPE = "notification:user"
ADMIN_SCOPE = "notification:admin"

# Dispatch limits
MAX_RECIPIENTS_PER_EVENT = 500
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Chat verification
VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_MAX_ATTEMPTS = 10

# Fallback display name when an actor name is not supplied
DEFAULT_ACTOR_NAME = "A team member"

# Bot replies
BRAND_NAME = "WorkTrac"
CHAT_WELCOME_MESSAGE = (
    "Welcome to the WorkTrac notification bot! 🚀\n\n"
    "To link your account, open Settings → Notifications in WorkTrac, "
    "generate a verification code and send the 6-digit code here."
)
CHAT_LINK_SUCCESS_MESSAGE = (
    "✅ Success! Your Telegram account is now linked to WorkTrac. "
    "You will receive notifications here."
)
CHAT_INVALID_CODE_MESSAGE = (
    "⚠️ Invalid or expired verification code. Please try again with a new code "
    "from your WorkTrac settings."
)
CHAT_ERROR_MESSAGE = (
    "❌ An error occurred while linking your account. Please try again later."
)
CHAT_FALLBACK_MESSAGE = (
    "I'm your WorkTrac notification bot. I will send you updates about your "
    "tasks and workspaces.\n\nNeed help? Type /start for instructions."
)
CHAT_TEST_TITLE = "Test Notification"
CHAT_TEST_MESSAGE = (
    "This is a test notification from WorkTrac. "
    "If you can read this, your Telegram notifications are working."
)
