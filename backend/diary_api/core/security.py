"""
Security utilities for JWT session token signing and verification.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from diary_api.core.config import Settings
from diary_api.core.exceptions import ValidationError, VerificationError

logger = logging.getLogger(__name__)

ExpiresIn = Union[str, int, timedelta]

_DURATION_PATTERN = re.compile(r"^\s*(-?\d+)\s*([smhdw]?)\s*$")
_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
    "w": 60 * 60 * 24 * 7,
}


def parse_expires_in(expires_in: ExpiresIn) -> timedelta:
    """
    Convert an expiry specification into a timedelta.

    Accepts "30s", "15m", "1h", "7d", "2w", a plain number of seconds, or a
    timedelta. Negative values are allowed and yield already-expired tokens.
    """
    if isinstance(expires_in, timedelta):
        return expires_in
    if isinstance(expires_in, bool):
        raise ValidationError("Invalid expiresIn value")
    if isinstance(expires_in, int):
        return timedelta(seconds=expires_in)

    match = _DURATION_PATTERN.match(str(expires_in))
    if not match:
        raise ValidationError("Invalid expiresIn value")

    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


class TokenService:
    """Signs and verifies HS256 session tokens with the configured secret."""

    def __init__(self, settings: Settings):
        self._secret = settings.JWT_SECRET
        self._algorithm = settings.JWT_ALGORITHM
        self._session_expires_in = settings.AUTH_TOKEN_EXPIRES_IN

    @property
    def session_lifetime(self) -> timedelta:
        return parse_expires_in(self._session_expires_in)

    def sign_token(self, payload: Dict[str, Any], expires_in: ExpiresIn = "1d") -> str:
        """
        Create a signed JWT.

        Args:
            payload: Claims to embed; must contain at least one key
            expires_in: Lifetime of the token

        Returns:
            Encoded JWT string

        Raises:
            ValidationError: If payload is empty or not JSON serializable
        """
        if not payload:
            raise ValidationError("Payload cannot be empty")

        to_encode = dict(payload)

        # Convert UUIDs to strings so they survive JSON encoding
        for key, value in to_encode.items():
            if isinstance(value, UUID):
                to_encode[key] = str(value)

        issued_at = datetime.now(timezone.utc)
        expire = issued_at + parse_expires_in(expires_in)
        to_encode["iat"] = int(issued_at.timestamp())
        to_encode["exp"] = int(expire.timestamp())

        try:
            return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        except (TypeError, ValueError):
            raise ValidationError("Payload must be JSON serializable")

    def sign_session_token(self, user_id: Union[str, UUID], email: str) -> str:
        """Issue the standard session token set as the auth cookie."""
        return self.sign_token(
            {"userId": str(user_id), "email": email},
            self._session_expires_in,
        )

    def verify_token(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Verify and decode a JWT.

        The HMAC covers the entire signature segment, so tampering with any
        character of it fails verification.

        Returns:
            Decoded claims including iat and exp

        Raises:
            VerificationError: If the token is malformed, tampered or expired
        """
        if not token or token.count(".") != 2:
            raise VerificationError("Malformed token")

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # sub and jti may carry any JSON value
                options={"verify_aud": False, "verify_sub": False, "verify_jti": False},
            )
        except ExpiredSignatureError:
            raise VerificationError("Token has expired")
        except JWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise VerificationError("Invalid token")
