from typing import Any, Optional

import structlog
from sqlalchemy import insert
from sqlalchemy.engine import Connection

from stay_with_friends.models.users import User
from stay_with_friends.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def create_user(
    conn: Connection,
    user_id: str,
    email: str,
    name: Optional[str] = None,
    image: Optional[str] = None,
) -> dict[str, Any]:
    """
    Insert a directory entry and return it.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        user_id (str): Id issued by the identity layer.
        email (str): Unique email address.
        name (Optional[str]): Display name.
        image (Optional[str]): Avatar URL.

    Returns:
        dict[str, Any]: The inserted row.
    """
    now = utc_now()
    row = {
        "id": user_id,
        "email": email,
        "name": name,
        "image": image,
        "email_verified": now,
        "created_at": now,
    }
    conn.execute(insert(User).values(**row))
    logger.info("user_created", user_id=user_id)
    return row
