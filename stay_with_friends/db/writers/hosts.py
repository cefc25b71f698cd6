from typing import Any, Optional

import structlog
from sqlalchemy import insert
from sqlalchemy.engine import Connection

from stay_with_friends.models.base import new_id
from stay_with_friends.models.hosts import Host

logger = structlog.get_logger(__name__)


def insert_host(
    conn: Connection,
    owner_id: str,
    name: str,
    location: Optional[str] = None,
    description: Optional[str] = None,
    **details: Any,
) -> str:
    """
    Insert a host listing and return its id.

    Listing CRUD belongs to the profile layer; this writer is the seam that
    layer (and the test suite) uses to put a host on record.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        owner_id (str): Owning user id.
        name (str): Listing name.
        location (Optional[str]): Free-text location.
        description (Optional[str]): Free-text description.
        **details: Other Host columns (city, country, max_guests).

    Returns:
        str: New host id.
    """
    host_id = new_id()
    conn.execute(
        insert(Host).values(
            id=host_id,
            owner_id=owner_id,
            name=name,
            location=location,
            description=description,
            **details,
        )
    )
    logger.info("host_created", host_id=host_id, owner_id=owner_id)
    return host_id
