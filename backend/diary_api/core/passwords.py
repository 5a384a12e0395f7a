"""
Password hashing with bcrypt.
"""
import bcrypt

from diary_api.core.constants import PasswordPolicy
from diary_api.core.exceptions import ValidationError


def hash_password(password: str) -> str:
    """
    Hash a plain text password.

    Args:
        password: Plain text password

    Returns:
        bcrypt hash string (salt embedded)

    Raises:
        ValidationError: If password is empty, too short or too long
    """
    if not password:
        raise ValidationError("Password cannot be empty")

    if len(password) < PasswordPolicy.MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PasswordPolicy.MIN_LENGTH} characters long"
        )

    encoded = password.encode("utf-8")
    if len(encoded) > PasswordPolicy.MAX_BYTES:
        raise ValidationError(
            f"Password must be at most {PasswordPolicy.MAX_BYTES} bytes long"
        )

    salt = bcrypt.gensalt(rounds=PasswordPolicy.BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def compare_password(password: str, hashed: str) -> bool:
    """
    Check a plain text password against a stored hash.

    Returns False for an empty or wrong password. A hash that is not a
    bcrypt hash raises instead of quietly failing the comparison.

    Raises:
        ValidationError: If the stored hash is not a valid bcrypt hash
    """
    if not password:
        return False

    encoded = password.encode("utf-8")
    if len(encoded) > PasswordPolicy.MAX_BYTES:
        return False

    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError("Invalid hash format")
