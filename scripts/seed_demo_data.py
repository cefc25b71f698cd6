import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from datetime import date, timedelta

import structlog
from sqlalchemy.engine import Engine

from stay_with_friends.db.engine import engine
from stay_with_friends.db.readers.users import find_user_by_email
from stay_with_friends.db.writers.hosts import insert_host
from stay_with_friends.db.writers.users import create_user
from stay_with_friends.logging_config import setup_logging
from stay_with_friends.models.base import Base, new_id
from stay_with_friends.services import availability, bookings, connections, invitations

setup_logging()
logger = structlog.get_logger(__name__)

DEMO_USERS = [
    ("alice@example.com", "Alice Alpine"),
    ("bob@example.com", "Bob Beach"),
    ("carol@example.com", "Carol City"),
]

DEMO_HOSTS = [
    (
        "alice@example.com",
        "Mountain Cabin",
        {"location": "Aspen, CO", "description": "Log cabin near the lifts", "max_guests": 4},
    ),
    (
        "bob@example.com",
        "Beach Bungalow",
        {"location": "Santa Cruz, CA", "description": "Steps from the beach", "max_guests": 2},
    ),
]


def ensure_user(db: Engine, email: str, name: str) -> str:
    with db.begin() as conn:
        existing = find_user_by_email(conn, email)
        if existing is not None:
            return existing["id"]
        return create_user(conn, new_id(), email, name=name)["id"]


def seed(db: Engine, start: date) -> None:
    """
    Create demo members, hosts, calendars, a booking request, a connection and an invitation.

    Meant for an empty local database; a second run stops at the existing connection.
    """
    Base.metadata.create_all(db)
    user_ids = {email: ensure_user(db, email, name) for email, name in DEMO_USERS}

    host_ids = {}
    for owner_email, name, details in DEMO_HOSTS:
        with db.begin() as conn:
            host_ids[name] = insert_host(conn, user_ids[owner_email], name, **details)
        availability.add_interval(
            db, host_ids[name], start, start + timedelta(days=60), notes="Open for friends"
        )

    bookings.create_booking_request(
        db,
        host_ids["Mountain Cabin"],
        user_ids["carol@example.com"],
        start + timedelta(days=7),
        start + timedelta(days=10),
        2,
        "Would love to visit!",
        capacity=4,
    )
    edge = connections.request_connection(
        db, user_ids["alice@example.com"], "bob@example.com", "friend"
    )
    connections.set_connection_status(db, edge["id"], "accepted", user_ids["bob@example.com"])
    invitation = invitations.create_invitation(
        db, user_ids["alice@example.com"], "dave@example.com", "Join our travel circle"
    )

    logger.info(
        "demo_data_seeded",
        users=len(user_ids),
        hosts=len(host_ids),
        invitation_id=invitation["id"],
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a local database with demo data")
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=date.today(),
        help="First day of the demo calendars (YYYY-MM-DD)",
    )
    args = parser.parse_args()

    try:
        seed(engine, args.start)
    except Exception:
        logger.exception("demo_seed_failed")
        raise


if __name__ == "__main__":
    main()
