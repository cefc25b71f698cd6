"""
Unit tests for domain-error translation in route handlers.
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException

from stay_with_friends.errors import (
    AlreadyConnected,
    EmailMismatch,
    Expired,
    InvalidGuestCount,
    InvalidToken,
    NotFound,
)
from stay_with_friends.routes._helpers import translate_errors


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, expected_status",
    [
        (NotFound("missing"), 404),
        (InvalidToken(), 404),
        (EmailMismatch(), 403),
        (AlreadyConnected(), 409),
        (Expired(), 410),
        (InvalidGuestCount(), 422),
    ],
)
def test_domain_errors_map_to_status_codes(error: Exception, expected_status: int) -> None:
    with pytest.raises(HTTPException) as exc_info:
        with translate_errors("test_event"):
            raise error

    assert exc_info.value.status_code == expected_status
    assert exc_info.value.detail["code"] == error.code  # type: ignore[attr-defined]


@pytest.mark.unit
def test_unexpected_errors_become_500() -> None:
    with pytest.raises(HTTPException) as exc_info:
        with translate_errors("test_event"):
            raise RuntimeError("boom")

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Internal server error"


@pytest.mark.unit
def test_http_exceptions_pass_through() -> None:
    with pytest.raises(HTTPException) as exc_info:
        with translate_errors("test_event"):
            raise HTTPException(status_code=403, detail="nope")

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "nope"
