"""
Unit tests for lazily derived invitation status and token generation.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stay_with_friends.services.invitations import (
    effective_status,
    generate_token,
    invitation_url,
    is_expired,
)

NOW = datetime(2025, 11, 1, 12, 0, tzinfo=timezone.utc)


def _invitation(status: str, expires_at: datetime) -> dict:
    return {"id": "inv-1", "status": status, "expires_at": expires_at}


@pytest.mark.unit
def test_pending_before_expiry_reads_pending() -> None:
    invitation = _invitation("pending", NOW + timedelta(days=1))

    assert effective_status(invitation, NOW) == "pending"


@pytest.mark.unit
def test_pending_after_expiry_reads_expired() -> None:
    invitation = _invitation("pending", NOW - timedelta(seconds=1))

    assert effective_status(invitation, NOW) == "expired"


@pytest.mark.unit
def test_expiry_instant_itself_is_not_expired() -> None:
    invitation = _invitation("pending", NOW)

    assert not is_expired(invitation, NOW)


@pytest.mark.unit
@pytest.mark.parametrize("status", ["accepted", "cancelled", "expired"])
def test_terminal_statuses_are_reported_as_stored(status: str) -> None:
    invitation = _invitation(status, NOW - timedelta(days=10))

    assert effective_status(invitation, NOW) == status


@pytest.mark.unit
def test_naive_timestamps_are_treated_as_utc() -> None:
    naive_expiry = (NOW - timedelta(hours=1)).replace(tzinfo=None)

    assert is_expired(_invitation("pending", naive_expiry), NOW)


@pytest.mark.unit
def test_generate_token_is_fixed_length_hex_and_unique() -> None:
    tokens = {generate_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 64
        int(token, 16)


@pytest.mark.unit
def test_invitation_url_joins_base_and_token() -> None:
    assert invitation_url("abc").endswith("/invite/abc")
