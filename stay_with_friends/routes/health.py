"""
Liveness and readiness probes.

``/ready`` only reports ready once the database answers and the migrated
tables are in place, so traffic is held back while ``alembic upgrade`` runs.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from stay_with_friends.db.engine import check_engine_health, missing_tables

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check() -> JSONResponse:
    return JSONResponse(content={"status": "ok"})


@router.get("/ready")
def readiness_check() -> JSONResponse:
    """
    Readiness probe.

    Example:
        >>> GET /ready
        {"status": "ready", "checks": {"database": "ok", "schema": "ok"}}
    """
    if not check_engine_health():
        logger.error("readiness_check_failed", reason="database_not_accessible")
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "checks": {"database": "failed", "schema": "unknown"}},
        )

    absent = missing_tables()
    if absent:
        logger.error("readiness_check_failed", reason="schema_incomplete", missing_tables=absent)
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "checks": {"database": "ok", "schema": "missing"}},
        )

    return JSONResponse(content={"status": "ready", "checks": {"database": "ok", "schema": "ok"}})
