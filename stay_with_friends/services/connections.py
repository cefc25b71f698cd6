"""
Connection state machine for the undirected trust edge between two users.

An edge is requested as ``pending`` by one user and answered by either
endpoint. Only one edge may exist per pair of users in any status, so a
declined request blocks a new request until the edge is removed.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from sqlalchemy.engine import Connection as DBConnection
from sqlalchemy.engine import Engine

from stay_with_friends.db.readers.connections import (
    find_connection_between,
    get_connection,
    list_accepted_for_user,
    list_pending_to_user,
)
from stay_with_friends.db.readers.users import find_user_by_email
from stay_with_friends.db.writers.connections import (
    delete_connections_between,
    insert_connection,
    update_connection_status,
)
from stay_with_friends.errors import (
    AlreadyConnected,
    InvalidState,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from stay_with_friends.metrics import connection_transitions
from stay_with_friends.models.connections import CONNECTION_STATUSES
from stay_with_friends.utils.datetime import Clock, utc_now
from stay_with_friends.validators import validate_email, validate_optional_text, validate_status

logger = structlog.get_logger(__name__)


def open_edge(
    conn: DBConnection,
    user_id: str,
    target_id: str,
    relationship: Optional[str],
    status: str,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """
    Insert an edge from ``user_id`` to ``target_id`` unless the pair is already linked.

    Raises:
        ValidationFailed: If both ends are the same user
        AlreadyConnected: If any row links the pair, in any status or direction
    """
    if user_id == target_id:
        raise ValidationFailed("Cannot connect to yourself")
    if find_connection_between(conn, user_id, target_id) is not None:
        raise AlreadyConnected("Users are already connected or have a pending connection")
    return insert_connection(conn, user_id, target_id, relationship, status, clock())


def request_connection(
    engine: Engine,
    user_id: str,
    target_email: str,
    relationship: Optional[str] = None,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """
    Ask a registered user, found by email, to connect.

    Args:
        engine: SQLAlchemy engine
        user_id: Authenticated requester
        target_email: Email of the user to connect with
        relationship: Optional label (max 50 chars)
        clock: Source of ``created_at``

    Returns:
        dict[str, Any]: The new ``pending`` connection row

    Raises:
        NotFound: If no user has that email
        AlreadyConnected: If the two users already share an edge
    """
    target_email = validate_email(target_email)
    validate_optional_text(relationship, "Relationship", 50)

    with engine.begin() as conn:
        target = find_user_by_email(conn, target_email)
        if target is None:
            raise NotFound("User with this email not found")
        connection = open_edge(conn, user_id, target["id"], relationship, "pending", clock)

    connection_transitions.labels(status="pending").inc()
    logger.info(
        "connection_requested",
        connection_id=connection["id"],
        user_id=user_id,
        connected_user_id=target["id"],
    )
    return connection


def _load_for_endpoint(conn: DBConnection, connection_id: str, caller_id: str) -> dict[str, Any]:
    connection = get_connection(conn, connection_id)
    if connection is None:
        raise NotFound(f"Connection {connection_id} not found")
    if caller_id not in (connection["user_id"], connection["connected_user_id"]):
        raise Unauthorized("Can only change connections you are part of")
    return connection


def set_connection_status(
    engine: Engine, connection_id: str, new_status: str, caller_id: str
) -> dict[str, Any]:
    """
    Set the status of an edge on behalf of either endpoint.

    Raises:
        InvalidStatus: If new_status is not a connection status
        NotFound: If the connection does not exist
        Unauthorized: If the caller is not one of the two endpoints
    """
    validate_status(new_status, CONNECTION_STATUSES)

    with engine.begin() as conn:
        _load_for_endpoint(conn, connection_id, caller_id)
        update_connection_status(conn, connection_id, new_status)
        updated = get_connection(conn, connection_id)

    connection_transitions.labels(status=new_status).inc()
    logger.info(
        "connection_status_updated",
        connection_id=connection_id,
        status=new_status,
        caller_id=caller_id,
    )
    return updated  # type: ignore[return-value]


def delete_connection(engine: Engine, connection_id: str, caller_id: str) -> bool:
    """
    Remove an accepted edge on behalf of either endpoint.

    Every row linking the two users is removed in one statement, so mirrored
    rows created by invitation acceptance go together.

    Returns:
        bool: True if rows were removed, False if the connection was already gone

    Raises:
        Unauthorized: If the caller is not one of the two endpoints
        InvalidState: If the connection is not ``accepted``
    """
    with engine.begin() as conn:
        connection = get_connection(conn, connection_id)
        if connection is None:
            logger.info("connection_already_deleted", connection_id=connection_id)
            return False
        if caller_id not in (connection["user_id"], connection["connected_user_id"]):
            raise Unauthorized("Can only remove connections you are part of")
        if connection["status"] != "accepted":
            raise InvalidState("Only accepted connections can be removed")
        removed = delete_connections_between(
            conn, connection["user_id"], connection["connected_user_id"]
        )

    connection_transitions.labels(status="deleted").inc()
    logger.info("connection_deleted", connection_id=connection_id, rows_removed=removed)
    return removed > 0


def connections_of(engine: Engine, user_id: str) -> list[dict[str, Any]]:
    """
    Accepted connections of a user, one entry per counterpart.

    Each entry carries the connection row plus a ``connected_user`` dict for
    the user at the other end, whichever direction the row was stored in.
    """
    with engine.connect() as conn:
        rows = list_accepted_for_user(conn, user_id)

    seen: set[str] = set()
    connections = []
    for row in rows:
        other_id = row["other_user_id"]
        if other_id in seen:
            continue
        seen.add(other_id)
        connections.append(
            {
                "id": row["id"],
                "user_id": row["user_id"],
                "connected_user_id": row["connected_user_id"],
                "relationship": row["relationship"],
                "status": row["status"],
                "created_at": row["created_at"],
                "connected_user": {
                    "id": other_id,
                    "email": row["email"],
                    "name": row["name"],
                    "image": row["image"],
                },
            }
        )
    return connections


def pending_requests_to(engine: Engine, user_id: str) -> list[dict[str, Any]]:
    """Pending edges where the user is the target, each with a ``requester`` dict."""
    with engine.connect() as conn:
        rows = list_pending_to_user(conn, user_id)

    return [
        {
            "id": row["id"],
            "user_id": row["user_id"],
            "connected_user_id": row["connected_user_id"],
            "relationship": row["relationship"],
            "status": row["status"],
            "created_at": row["created_at"],
            "requester": {
                "id": row["user_id"],
                "email": row["email"],
                "name": row["name"],
                "image": row["image"],
            },
        }
        for row in rows
    ]
