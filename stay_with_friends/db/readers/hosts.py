from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from stay_with_friends.models.hosts import Host


def get_host(conn: Connection, host_id: str) -> Optional[dict[str, Any]]:
    row = conn.execute(select(Host).where(Host.id == host_id)).mappings().fetchone()
    return dict(row) if row else None


def host_owned_by(conn: Connection, host_id: str, user_id: str) -> bool:
    """
    Check whether a user owns a host listing.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        host_id (str): Host id.
        user_id (str): Candidate owner id.

    Returns:
        bool: True if the host exists and ``user_id`` owns it.
    """
    result = conn.execute(
        select(Host.id).where(Host.id == host_id, Host.owner_id == user_id)
    )
    return result.fetchone() is not None
