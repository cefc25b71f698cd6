from datetime import date
from typing import Optional

import structlog
from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from stay_with_friends.models.availabilities import Availability
from stay_with_friends.models.base import new_id

logger = structlog.get_logger(__name__)


def insert_availability(
    conn: Connection,
    host_id: str,
    start_date: date,
    end_date: date,
    status: str = "available",
    notes: Optional[str] = None,
) -> str:
    """
    Insert one availability row without any overlap check.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        host_id (str): Owning host.
        start_date (date): First day (inclusive).
        end_date (date): Last day (inclusive).
        status (str): available, booked or blocked.
        notes (Optional[str]): Free text.

    Returns:
        str: New availability id.
    """
    availability_id = new_id()
    conn.execute(
        insert(Availability).values(
            id=availability_id,
            host_id=host_id,
            start_date=start_date,
            end_date=end_date,
            status=status,
            notes=notes,
        )
    )
    return availability_id


def mark_availability_booked(conn: Connection, availability_id: str, notes: str) -> None:
    """
    Flip an availability row to ``booked`` and replace its notes.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        availability_id (str): Row to flip.
        notes (str): Annotation naming the guest.
    """
    stmt = (
        update(Availability)
        .where(Availability.id == availability_id)
        .values(status="booked", notes=notes)
    )
    conn.execute(stmt)
