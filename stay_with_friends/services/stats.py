"""Aggregate counters for the landing page."""

from sqlalchemy.engine import Engine

from stay_with_friends.db.readers.stats import get_totals


def site_totals(engine: Engine) -> dict[str, int]:
    with engine.connect() as conn:
        return get_totals(conn)
