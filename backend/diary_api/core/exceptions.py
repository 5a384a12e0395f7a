"""
Error taxonomy for authentication and session handling.

Messages are fixed strings: they never carry the token, authorization code,
secret or password being processed.
"""
from typing import Any, Dict, Optional


class DiaryAppError(Exception):
    """Base application error, rendered as ``{"error": message}``."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(DiaryAppError):
    """Bad input: empty password, empty JWT payload, malformed hash."""

    status_code = 400
    message = "Invalid input"


class ConfigurationError(DiaryAppError):
    """A required secret or client identifier is not configured."""

    status_code = 500
    message = "Server is not configured"


class VerificationError(DiaryAppError):
    """Token is expired, malformed or carries a bad signature."""

    status_code = 401
    message = "Token verification failed"


class UpstreamError(DiaryAppError):
    """Non-2xx or network failure talking to Google."""

    status_code = 502
    message = "Upstream request failed"
