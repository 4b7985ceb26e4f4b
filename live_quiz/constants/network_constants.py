"""Network configuration constants for the quiz coordinator."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 3000
ADMIN_TOKEN_HEADER: str = "x-admin-token"
