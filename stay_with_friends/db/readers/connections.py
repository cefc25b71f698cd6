from typing import Any, Optional

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.engine import Connection as DBConnection

from stay_with_friends.models.connections import Connection
from stay_with_friends.models.users import User


def pair_clause(user_a: str, user_b: str) -> Any:
    """
    Match the edge between two users whichever way it was stored.

    Args:
        user_a (str): One endpoint.
        user_b (str): The other endpoint.

    Returns:
        A boolean SQL expression usable in WHERE clauses.
    """
    return or_(
        and_(Connection.user_id == user_a, Connection.connected_user_id == user_b),
        and_(Connection.user_id == user_b, Connection.connected_user_id == user_a),
    )


def get_connection(conn: DBConnection, connection_id: str) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(select(Connection).where(Connection.id == connection_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def find_connection_between(
    conn: DBConnection, user_a: str, user_b: str
) -> Optional[dict[str, Any]]:
    """
    Fetch any row linking two users, in any status and either direction.

    Returns:
        Optional[dict[str, Any]]: The oldest matching row, or None.
    """
    row = (
        conn.execute(
            select(Connection)
            .where(pair_clause(user_a, user_b))
            .order_by(Connection.created_at, Connection.id)
            .limit(1)
        )
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def list_accepted_for_user(conn: DBConnection, user_id: str) -> list[dict[str, Any]]:
    """
    Fetch accepted edges touching a user, joined to the user at the other end.

    Args:
        conn (DBConnection): An active SQLAlchemy database connection.
        user_id (str): The user whose connections are listed.

    Returns:
        list[dict[str, Any]]: Connection rows plus ``other_user_id``, ``email``,
        ``name`` and ``image`` of the counterpart. Mirrored rows both appear.
    """
    other_user_id = case(
        (Connection.user_id == user_id, Connection.connected_user_id),
        else_=Connection.user_id,
    )

    result = conn.execute(
        select(
            Connection,
            other_user_id.label("other_user_id"),
            User.email,
            User.name,
            User.image,
        )
        .join(User, User.id == other_user_id)
        .where(
            or_(Connection.user_id == user_id, Connection.connected_user_id == user_id),
            Connection.status == "accepted",
        )
        .order_by(Connection.created_at, Connection.id)
    )
    return [dict(row) for row in result.mappings()]


def list_pending_to_user(conn: DBConnection, user_id: str) -> list[dict[str, Any]]:
    """
    Fetch pending edges where the user is the target, joined to the requester.

    Returns:
        list[dict[str, Any]]: Connection rows plus requester ``email``, ``name`` and ``image``.
    """
    result = conn.execute(
        select(Connection, User.email, User.name, User.image)
        .join(User, User.id == Connection.user_id)
        .where(Connection.connected_user_id == user_id, Connection.status == "pending")
        .order_by(Connection.created_at, Connection.id)
    )
    return [dict(row) for row in result.mappings()]


def count_accepted_connections(conn: DBConnection) -> int:
    result = conn.execute(
        select(func.count(Connection.id)).where(Connection.status == "accepted")
    )
    return int(result.scalar_one())
