from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from stay_with_friends.db.readers.connections import count_accepted_connections
from stay_with_friends.models.booking_requests import BookingRequest
from stay_with_friends.models.hosts import Host


def count_hosts(conn: Connection) -> int:
    return int(conn.execute(select(func.count(Host.id))).scalar_one())


def count_booking_requests(conn: Connection) -> int:
    return int(conn.execute(select(func.count(BookingRequest.id))).scalar_one())


def get_totals(conn: Connection) -> dict[str, int]:
    """
    Site-wide totals shown on the landing page.

    Accepted connections are counted per stored row, so a pair linked through
    an accepted invitation counts twice.
    """
    return {
        "total_hosts": count_hosts(conn),
        "total_connections": count_accepted_connections(conn),
        "total_booking_requests": count_booking_requests(conn),
    }
