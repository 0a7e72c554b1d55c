"""Caller-side input validation for auth and task forms."""

import re
from datetime import date
from typing import Any, Optional

from src.utils.errors import ValidationError

EMAIL_PATTERN = re.compile(r'^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$', re.IGNORECASE)

MIN_PASSWORD_LENGTH = 3
MIN_NAME_LENGTH = 3


def optional_text(value: Any, field: str) -> str:
    """Return a form text value, treating None as empty; non-strings are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def validate_credentials(email: Any, password: Any, name: Any = None, sign_up: bool = False) -> None:
    """Validate sign-in / sign-up input before calling the identity provider."""
    email = optional_text(email, "Email")
    password = optional_text(password, "Password")
    name = optional_text(name, "Name")
    if sign_up and len(name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError(f"Name must be at least {MIN_NAME_LENGTH} characters")
    if not email or not EMAIL_PATTERN.match(email.strip()):
        raise ValidationError("Invalid email address")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def validate_title(title: Any) -> str:
    """Return the trimmed title, or raise if it is blank."""
    title = optional_text(title, "Title").strip()
    if not title:
        raise ValidationError("Title is required")
    return title


def parse_due_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` form value; blank means no due date."""
    value = optional_text(value, "Due date").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid due date: {value!r}") from e
