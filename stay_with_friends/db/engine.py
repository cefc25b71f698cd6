"""
SQLAlchemy engine singleton with production-ready connection pooling.

This module creates a single engine instance. Pool sizing only applies to
server databases; SQLite (used for local runs and tests) keeps its default pool.
"""

from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine

from stay_with_friends.config import DATABASE_URL
from stay_with_friends.models import (  # noqa: F401
    availabilities,
    booking_requests,
    connections,
    hosts,
    invitations,
    users,
)
from stay_with_friends.models.base import Base

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

engine_options: dict[str, Any] = {"future": True, "echo": False}
if not DATABASE_URL.startswith("sqlite"):
    engine_options.update(
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections when pool is exhausted
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=3600,  # Recycle connections after 1 hour
    )

engine: Engine = create_engine(DATABASE_URL, **engine_options)


def check_engine_health() -> bool:
    """
    Check if database engine is healthy and connections are working.

    This function is used by the /ready endpoint to verify database
    connectivity before allowing traffic to the service.

    Returns:
        bool: True if database is reachable and healthy, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def missing_tables() -> list[str]:
    """
    Tables the services need that the connected database lacks.

    A non-empty result means migrations have not been applied yet.
    """
    present = set(inspect(engine).get_table_names())
    return sorted(set(Base.metadata.tables) - present)
