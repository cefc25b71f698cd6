from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection as DBConnection

from stay_with_friends.db.readers.connections import pair_clause
from stay_with_friends.models.base import new_id
from stay_with_friends.models.connections import Connection


def insert_connection(
    conn: DBConnection,
    user_id: str,
    connected_user_id: str,
    relationship: Optional[str],
    status: str,
    created_at: datetime,
) -> dict[str, Any]:
    """
    Insert one directed connection row.

    Args:
        conn (DBConnection): SQLAlchemy DB connection.
        user_id (str): Initiating user.
        connected_user_id (str): Target user.
        relationship (Optional[str]): Free-text label such as "friend".
        status (str): Initial status.
        created_at (datetime): Creation timestamp.

    Returns:
        dict[str, Any]: The inserted row.
    """
    row = {
        "id": new_id(),
        "user_id": user_id,
        "connected_user_id": connected_user_id,
        "relationship": relationship,
        "status": status,
        "created_at": created_at,
    }
    conn.execute(insert(Connection).values(**row))
    return row


def update_connection_status(conn: DBConnection, connection_id: str, status: str) -> None:
    stmt = update(Connection).where(Connection.id == connection_id).values(status=status)
    conn.execute(stmt)


def delete_connections_between(conn: DBConnection, user_a: str, user_b: str) -> int:
    """
    Delete every row linking two users, in both storage directions.

    Returns:
        int: Number of rows removed.
    """
    result = conn.execute(delete(Connection).where(pair_clause(user_a, user_b)))
    return result.rowcount
