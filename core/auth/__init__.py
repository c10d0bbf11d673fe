"""OAuth2 authentication for the notification engine API."""
