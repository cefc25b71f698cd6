"""
Internal helpers shared by the route handlers.

Services raise domain errors; ``translate_errors`` turns them into HTTP
responses in one place so handlers stay short.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from fastapi import HTTPException, status
from sqlalchemy.engine import Engine

from stay_with_friends.db.readers.hosts import get_host, host_owned_by
from stay_with_friends.errors import StayWithFriendsError

logger = structlog.get_logger(__name__)


@contextmanager
def translate_errors(event: str, **context: Any) -> Iterator[None]:
    """
    Map domain errors to HTTP errors and log anything unexpected.

    Args:
        event: Event name prefix for log lines (e.g. "booking_request_create")
        **context: Identifiers added to the log lines

    Raises:
        HTTPException: With the domain error's status code, or 500
    """
    try:
        yield
    except HTTPException:
        raise
    except StayWithFriendsError as e:
        logger.info(f"{event}_rejected", code=e.code, **context)
        raise HTTPException(
            status_code=e.status_code,
            detail={"code": e.code, "message": e.message},
        ) from e
    except Exception as e:
        logger.exception(f"{event}_failed", error=str(e), **context)
        raise HTTPException(status_code=500, detail="Internal server error") from e


def load_host_or_404(engine: Engine, host_id: str) -> dict[str, Any]:
    with engine.connect() as conn:
        host = get_host(conn, host_id)
    if host is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Host {host_id} not found",
        )
    return host


def validate_host_owner_or_403(engine: Engine, host_id: str, user_id: str) -> None:
    """
    Validate that the caller owns the host, raise 403 if not.

    Raises:
        HTTPException: 403 if the host is missing or owned by someone else
    """
    with engine.connect() as conn:
        owned = host_owned_by(conn, host_id, user_id)
    if not owned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Can only manage availability for your own hosts",
        )
