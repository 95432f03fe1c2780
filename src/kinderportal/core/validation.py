"""
Input validation functions for KinderPortal.

All validation functions follow the pattern:
1. Accept raw user input (path segment, query string, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError

They never touch the database, so malformed input is rejected before any
lookup is made.
"""

import re
from datetime import date


class ValidationError(Exception):
    """Raised when user input fails validation."""

    pass


# ============================================================================
# Identifier Validation
# ============================================================================

_DIGITS = re.compile(r"^[0-9]+$")

# Largest value a PostgreSQL INTEGER column can hold
MAX_INT_ID = 2_147_483_647


def parse_positive_id(raw: str | None, label: str = "ID") -> int:
    """
    Parse a numeric path identifier.

    Accepts only plain decimal digits ("42"). Signs, decimals, whitespace
    inside the number and non-numeric text are rejected.

    Args:
        raw: Raw identifier from the URL
        label: Name used in the error message

    Returns:
        The identifier as an int

    Raises:
        ValidationError: If the identifier is not a positive integer
    """
    if raw is None:
        raise ValidationError(f"Invalid {label}")

    cleaned = raw.strip()
    if not _DIGITS.match(cleaned):
        raise ValidationError(f"Invalid {label}")

    value = int(cleaned)
    if value < 1 or value > MAX_INT_ID:
        raise ValidationError(f"Invalid {label}")

    return value


def parse_child_id(raw: str | None) -> int:
    """Parse the child identifier from a `/children/{child_id}` route."""
    return parse_positive_id(raw, "child ID")


# ============================================================================
# Date Validation
# ============================================================================


def parse_iso_date(raw: str | None, label: str = "date") -> date | None:
    """
    Parse an optional YYYY-MM-DD query parameter.

    Returns None for a missing or blank value.
    """
    if raw is None or raw.strip() == "":
        return None

    try:
        return date.fromisoformat(raw.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid {label}: expected YYYY-MM-DD") from e


def validate_date_range(start: date | None, end: date | None) -> tuple[date, date] | None:
    """
    Validate an optional inclusive date range.

    A range is applied only when both ends are given. A lone start or end
    date is ignored.

    Raises:
        ValidationError: If the start date is after the end date
    """
    if start is None or end is None:
        return None

    if start > end:
        raise ValidationError("startDate must be on or before endDate")

    return start, end


# ============================================================================
# Contact Validation
# ============================================================================

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str | None) -> str:
    """Lowercase and trim an email address, rejecting obviously invalid ones."""
    if email is None or email.strip() == "":
        raise ValidationError("Email cannot be empty")

    cleaned = email.strip().lower()
    if not _EMAIL.match(cleaned):
        raise ValidationError("Invalid email format")

    return cleaned
