"""
utils/validation_utils.py

Purpose: Input validation

- Mobile number format check
- Required field checks
- Password length limits for bcrypt
"""

import re
from typing import Any, Optional

from utils.constants import BCRYPT_MAX_PASSWORD_BYTES, MOBILE_LENGTH


# ASCII digits only; \d would also accept other Unicode digit characters
MOBILE_PATTERN = re.compile(rf"[0-9]{{{MOBILE_LENGTH}}}")


def validate_mobile(mobile: Optional[str]) -> bool:
    """
    Validates a mobile number: exactly 10 decimal digits,
    nothing before or after them.

    Examples:
        validate_mobile("9876543210")   -> True
        validate_mobile("98765 43210")  -> False
        validate_mobile("9876543210\\n") -> False

    Args:
        mobile: Mobile number as received

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(mobile, str):
        return False
    return MOBILE_PATTERN.fullmatch(mobile) is not None


def is_blank(value: Any) -> bool:
    """Missing or empty values. Whitespace is not trimmed."""
    return value is None or value == ""


def all_present(*values: Any) -> bool:
    return not any(is_blank(value) for value in values)


def password_fits_bcrypt(password: str) -> bool:
    """
    bcrypt rejects (or silently truncates, depending on version)
    input longer than 72 bytes.
    """
    return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES
