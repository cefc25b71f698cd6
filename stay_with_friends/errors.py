"""
Domain errors raised by the availability, booking, connection and invitation services.

Every error is a synchronous, local failure: services raise before any write is
issued, so a rejected call never leaves a partial mutation behind. Route handlers
translate these into HTTP responses using the ``status_code`` attribute.
"""

from __future__ import annotations


class StayWithFriendsError(Exception):
    """Base class for all domain errors."""

    code = "error"
    status_code = 400

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationFailed(StayWithFriendsError):
    """A primitive argument (email, text length, date format) is malformed."""

    code = "validation_failed"
    status_code = 422


class InvalidRange(ValidationFailed):
    code = "invalid_range"


class InvalidGuestCount(ValidationFailed):
    code = "invalid_guest_count"


class InvalidStatus(ValidationFailed):
    code = "invalid_status"


class NotFound(StayWithFriendsError):
    code = "not_found"
    status_code = 404


class Unauthorized(StayWithFriendsError):
    code = "unauthorized"
    status_code = 403


class AlreadyConnected(StayWithFriendsError):
    code = "already_connected"
    status_code = 409


class DuplicateInvitation(StayWithFriendsError):
    code = "duplicate_invitation"
    status_code = 409


class InvalidToken(StayWithFriendsError):
    code = "invalid_token"
    status_code = 404


class AlreadyUsed(StayWithFriendsError):
    code = "already_used"
    status_code = 409


class Expired(StayWithFriendsError):
    code = "expired"
    status_code = 410


class EmailMismatch(StayWithFriendsError):
    code = "email_mismatch"
    status_code = 403


class InvalidState(StayWithFriendsError):
    code = "invalid_state"
    status_code = 409
