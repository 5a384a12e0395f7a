"""
Input validation helpers shared by auth and settings routes.
"""
from typing import Any

from email_validator import EmailNotValidError, validate_email


def is_valid_email(email: Any) -> bool:
    """Syntax check only; no DNS lookups."""
    if not isinstance(email, str) or not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_optional_email(email: Any) -> bool:
    """Contacts may omit the email entirely."""
    if email is None or email == "":
        return True
    return is_valid_email(email)


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""
