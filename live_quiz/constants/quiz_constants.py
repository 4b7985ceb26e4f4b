"""Quiz-related constants shared across the core and server layers."""

DEFAULT_CONTENT_PATH: str = "content.yml"
DEFAULT_SESSION_HISTORY_PATH: str = "sessions.log"

SESSION_ID_BYTES: int = 16
ADMIN_TOKEN_BYTES: int = 32
PODIUM_SIZE: int = 3

JOIN_ERROR_TEXT_KEY: str = "joinError"
DEFAULT_JOIN_ERROR: str = "The round has already started."

PASSWORD_SETTING: str = "dashboard_password"
PUBLIC_SETTINGS: tuple[str, ...] = ("client_reset_enabled",)
