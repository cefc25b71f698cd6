"""
Unit tests for the structlog processor that keeps invitation tokens out of logs.
"""

import pytest

from stay_with_friends.logging_config import redact_secrets


@pytest.mark.unit
def test_token_fields_are_redacted() -> None:
    event = {"event": "invitation_created", "token": "a" * 64, "invitation_url": "http://x/a"}

    result = redact_secrets(None, "info", event)

    assert result["token"] == "[redacted]"
    assert result["invitation_url"] == "[redacted]"
    assert result["event"] == "invitation_created"


@pytest.mark.unit
def test_other_fields_pass_through() -> None:
    event = {"event": "invitation_accepted", "invitation_id": "inv-1"}

    assert redact_secrets(None, "info", dict(event)) == event
