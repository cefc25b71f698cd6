from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from stay_with_friends.models.users import User


def find_user_by_email(conn: Connection, email: str) -> Optional[dict[str, Any]]:
    """
    Look up a member by email address, ignoring case.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        email (str): Email address to resolve.

    Returns:
        Optional[dict[str, Any]]: User row as a dict, or None if not registered.
    """
    row = (
        conn.execute(select(User).where(func.lower(User.email) == email.lower()))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def find_user_by_id(conn: Connection, user_id: str) -> Optional[dict[str, Any]]:
    """
    Look up a member by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        user_id (str): User id.

    Returns:
        Optional[dict[str, Any]]: User row as a dict, or None if not found.
    """
    row = conn.execute(select(User).where(User.id == user_id)).mappings().fetchone()
    return dict(row) if row else None
