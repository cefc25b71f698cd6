"""
Unit tests for argument validation.
"""

from __future__ import annotations

from datetime import date

import pytest

from stay_with_friends.errors import (
    InvalidGuestCount,
    InvalidRange,
    InvalidStatus,
    ValidationFailed,
)
from stay_with_friends.services.bookings import validate_guest_count
from stay_with_friends.utils.datetime import parse_date
from stay_with_friends.validators import (
    validate_date_range,
    validate_email,
    validate_name,
    validate_optional_text,
    validate_status,
)


@pytest.mark.unit
def test_validate_email_strips_and_returns_address() -> None:
    assert validate_email("  new@x.com ") == "new@x.com"


@pytest.mark.unit
def test_validate_email_lowercases_address() -> None:
    assert validate_email("Bob@X.com") == "bob@x.com"


@pytest.mark.unit
@pytest.mark.parametrize("email", [None, "", "a@b", "not-an-email", "a b@c.de", "x" * 250 + "@x.com"])
def test_validate_email_rejects_malformed(email: str | None) -> None:
    with pytest.raises(ValidationFailed):
        validate_email(email)


@pytest.mark.unit
def test_validate_date_range_allows_single_day() -> None:
    validate_date_range(date(2025, 5, 5), date(2025, 5, 5))


@pytest.mark.unit
def test_validate_date_range_rejects_reversed_range() -> None:
    with pytest.raises(InvalidRange):
        validate_date_range(date(2025, 5, 6), date(2025, 5, 5))


@pytest.mark.unit
def test_invalid_range_is_a_validation_failure() -> None:
    assert issubclass(InvalidRange, ValidationFailed)
    assert InvalidRange().status_code == 422


@pytest.mark.unit
def test_validate_status_rejects_unknown_value() -> None:
    with pytest.raises(InvalidStatus, match="pending, approved"):
        validate_status("maybe", ["pending", "approved"])


@pytest.mark.unit
def test_validate_optional_text_enforces_max_length() -> None:
    validate_optional_text(None, "Notes", 5)
    validate_optional_text("12345", "Notes", 5)
    with pytest.raises(ValidationFailed, match="Notes must be no more than 5"):
        validate_optional_text("123456", "Notes", 5)


@pytest.mark.unit
def test_validate_name_rejects_blank() -> None:
    with pytest.raises(ValidationFailed):
        validate_name("   ")


@pytest.mark.unit
@pytest.mark.parametrize("guests", [0, -1, 2.5, "3", True, None])
def test_validate_guest_count_rejects_non_positive_integers(guests: object) -> None:
    with pytest.raises(InvalidGuestCount):
        validate_guest_count(guests)


@pytest.mark.unit
def test_validate_guest_count_uses_capacity_when_given() -> None:
    validate_guest_count(4, capacity=4)
    with pytest.raises(InvalidGuestCount, match="no more than 4"):
        validate_guest_count(5, capacity=4)


@pytest.mark.unit
def test_validate_guest_count_defaults_to_max_guests() -> None:
    validate_guest_count(50)
    with pytest.raises(InvalidGuestCount):
        validate_guest_count(51)


@pytest.mark.unit
def test_parse_date_accepts_iso_strings_and_dates() -> None:
    assert parse_date("2025-12-01") == date(2025, 12, 1)
    assert parse_date(date(2025, 12, 1)) == date(2025, 12, 1)


@pytest.mark.unit
def test_parse_date_rejects_garbage() -> None:
    with pytest.raises(ValidationFailed, match="start_date"):
        parse_date("12/01/2025", "start_date")
