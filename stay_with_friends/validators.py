"""
Primitive argument validation shared by the services.

These checks run before any statement is issued so that a rejected call never
leaves a partial write behind.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable

from stay_with_friends.errors import InvalidRange, InvalidStatus, ValidationFailed

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: str | None) -> str:
    """
    Validate an email address and return it stripped and lower-cased.

    Raises:
        ValidationFailed: If missing, outside 5..255 chars, or not shaped like ``a@b.c``
    """
    if not email or not isinstance(email, str):
        raise ValidationFailed("Email is required")
    email = email.strip()
    if len(email) < 5 or len(email) > 255:
        raise ValidationFailed("Email must be between 5 and 255 characters")
    if not EMAIL_PATTERN.match(email):
        raise ValidationFailed("Email must be a valid email address")
    return email.lower()


def validate_name(name: str | None) -> None:
    if not name or not isinstance(name, str) or not name.strip():
        raise ValidationFailed("Name is required")
    if len(name) > 255:
        raise ValidationFailed("Name must be between 1 and 255 characters")


def validate_optional_text(text: str | None, field_name: str, max_length: int) -> None:
    if text is None:
        return
    if not isinstance(text, str):
        raise ValidationFailed(f"{field_name} must be a string")
    if len(text) > max_length:
        raise ValidationFailed(f"{field_name} must be no more than {max_length} characters")


def validate_date_range(start: date, end: date) -> None:
    """
    Raises:
        InvalidRange: If start falls after end (equal dates are a valid one-day range)
    """
    if start > end:
        raise InvalidRange("Start date must be before or equal to end date")


def validate_status(status: str, allowed: Iterable[str]) -> None:
    allowed = tuple(allowed)
    if status not in allowed:
        raise InvalidStatus(f"Status must be one of: {', '.join(allowed)}")
