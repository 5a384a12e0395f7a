"""
Centralized constants for the application.
"""


class AuthCookies:
    """Cookie names used by the session layer."""
    SESSION = "auth-token"
    OAUTH_STATE = "oauth-state"
    OAUTH_STATE_PATH = "/api/auth/google"


class Routes:
    """Page paths the authorization middleware knows about."""
    HOME = "/"
    LOGIN = "/auth/login"
    SIGNUP = "/auth/signup"
    DIARY = "/diary"
    SETTINGS = "/settings"
    LEGACY_LOGIN = "/login"
    LEGACY_DASHBOARD = "/dashboard"


class TimerStatus:
    """Stored values for the inactivity timer."""
    ACTIVE = "active"
    PAUSED = "paused"
    INACTIVE = "inactive"


# Pagination
class Pagination:
    DEFAULT_LIMIT = 10
    MAX_LIMIT = 50


class PasswordPolicy:
    MIN_LENGTH = 8
    MAX_BYTES = 72  # bcrypt ignores everything past this
    BCRYPT_ROUNDS = 10


# 30, 60, 90 and 180 days
VALID_IDLE_THRESHOLDS = (2592000, 5184000, 7776000, 15552000)
