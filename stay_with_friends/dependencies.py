"""
FastAPI dependency injection providers.

Route handlers receive the engine, the clock and the caller identity through
these providers, so tests can swap any of them via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Generator, Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.engine import Engine

from stay_with_friends.db.engine import engine
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.utils.datetime import Clock, utc_now


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> app.dependency_overrides[get_db_engine] = lambda: sqlite_engine
    """
    yield engine


def get_clock() -> Clock:
    """Provide the clock used for timestamps and invitation expiry."""
    return utc_now


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
) -> Identity:
    """
    Provide the authenticated caller.

    The gateway in front of this service verifies the session and forwards the
    caller as ``X-User-Id`` / ``X-User-Email`` headers.

    Raises:
        HTTPException: 401 if either header is missing
    """
    if not x_user_id or not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return Identity(id=x_user_id, email=x_user_email)
