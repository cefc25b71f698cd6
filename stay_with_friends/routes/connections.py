"""Connection routes: request, answer, remove and list trust edges."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.engine import Engine

from stay_with_friends.dependencies import get_clock, get_db_engine, get_identity
from stay_with_friends.routes._helpers import translate_errors
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.schemas.social import (
    ConnectionCreatePayload,
    ConnectionOut,
    ConnectionStatusPayload,
)
from stay_with_friends.services import connections
from stay_with_friends.utils.datetime import Clock

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/connections", status_code=status.HTTP_201_CREATED, response_model=ConnectionOut)
def request_connection(
    payload: ConnectionCreatePayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    with translate_errors("connection_request", user_id=identity.id):
        return connections.request_connection(
            engine, identity.id, payload.email, payload.relationship, clock=clock
        )


@router.patch("/connections/{connection_id}", response_model=ConnectionOut)
def update_connection(
    connection_id: str,
    payload: ConnectionStatusPayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("connection_update", connection_id=connection_id):
        return connections.set_connection_status(
            engine, connection_id, payload.status, identity.id
        )


@router.delete("/connections/{connection_id}")
def delete_connection(
    connection_id: str,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, bool]:
    """
    Remove an accepted connection.

    Returns:
        dict: ``deleted`` is False when the connection was already gone
    """
    with translate_errors("connection_delete", connection_id=connection_id):
        return {"deleted": connections.delete_connection(engine, connection_id, identity.id)}


@router.get("/connections", response_model=list[ConnectionOut])
def my_connections(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("connections_list"):
        return connections.connections_of(engine, identity.id)


@router.get("/connections/requests", response_model=list[ConnectionOut])
def my_connection_requests(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("connection_requests_list"):
        return connections.pending_requests_to(engine, identity.id)
