"""
Integration tests for the availability interval store.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.engine import Engine

from stay_with_friends.errors import InvalidRange, InvalidStatus
from stay_with_friends.models.availabilities import Availability
from stay_with_friends.services import availability


@pytest.mark.integration
def test_add_interval_persists_row(engine: Engine, host_id: str) -> None:
    availability_id = availability.add_interval(
        engine, host_id, "2025-12-01", "2025-12-07", "available", "winter"
    )

    with engine.connect() as conn:
        row = conn.execute(select(Availability).where(Availability.id == availability_id)).fetchone()

    assert row is not None
    assert row.host_id == host_id
    assert row.start_date == date(2025, 12, 1)
    assert row.end_date == date(2025, 12, 7)
    assert row.status == "available"
    assert row.notes == "winter"


@pytest.mark.integration
def test_add_interval_rejects_reversed_range(engine: Engine, host_id: str) -> None:
    with pytest.raises(InvalidRange):
        availability.add_interval(engine, host_id, "2025-12-07", "2025-12-01")

    assert availability.list_by_host(engine, host_id) == []


@pytest.mark.integration
def test_add_interval_rejects_unknown_status(engine: Engine, host_id: str) -> None:
    with pytest.raises(InvalidStatus):
        availability.add_interval(engine, host_id, "2025-12-01", "2025-12-02", "open")


@pytest.mark.integration
def test_overlapping_intervals_of_different_status_coexist(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-31", "available")
    availability.add_interval(engine, host_id, "2025-12-10", "2025-12-12", "blocked")

    rows = availability.list_by_host(engine, host_id)

    assert [row["status"] for row in rows] == ["available", "blocked"]


@pytest.mark.integration
def test_list_by_host_orders_by_start_date(engine: Engine, host_id: str, make_host, owner_id) -> None:
    other_host = make_host(owner_id, "City Flat")
    availability.add_interval(engine, host_id, "2026-02-01", "2026-02-03")
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-03")
    availability.add_interval(engine, other_host, "2025-11-01", "2025-11-03")
    availability.add_interval(engine, host_id, "2026-01-01", "2026-01-03")

    rows = availability.list_by_host(engine, host_id)

    assert [row["start_date"] for row in rows] == [
        date(2025, 12, 1),
        date(2026, 1, 1),
        date(2026, 2, 1),
    ]


@pytest.mark.integration
def test_enumerate_returns_union_of_disjoint_intervals(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-03")
    availability.add_interval(engine, host_id, "2025-12-08", "2025-12-09")

    days = availability.enumerate_available_dates(engine, "2025-11-28", "2025-12-12")

    assert days == [
        date(2025, 12, 1),
        date(2025, 12, 2),
        date(2025, 12, 3),
        date(2025, 12, 8),
        date(2025, 12, 9),
    ]


@pytest.mark.integration
def test_enumerate_deduplicates_days_from_overlapping_intervals(
    engine: Engine, host_id: str, make_host, owner_id
) -> None:
    other_host = make_host(owner_id, "City Flat")
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-05")
    availability.add_interval(engine, host_id, "2025-12-04", "2025-12-06")
    availability.add_interval(engine, other_host, "2025-12-02", "2025-12-02")

    days = availability.enumerate_available_dates(engine, "2025-12-01", "2025-12-31")

    assert days == [date(2025, 12, d) for d in range(1, 7)]


@pytest.mark.integration
def test_enumerate_single_day_interval_yields_one_date(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-24", "2025-12-24")

    assert availability.enumerate_available_dates(engine, "2025-12-24", "2025-12-24") == [
        date(2025, 12, 24)
    ]


@pytest.mark.integration
def test_enumerate_boundaries_are_inclusive(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-10", "2025-12-20")

    assert availability.enumerate_available_dates(engine, "2025-12-20", "2025-12-25") == [
        date(2025, 12, 20)
    ]
    assert availability.enumerate_available_dates(engine, "2025-12-05", "2025-12-10") == [
        date(2025, 12, 10)
    ]


@pytest.mark.integration
def test_enumerate_ignores_booked_and_blocked(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-02", "booked")
    availability.add_interval(engine, host_id, "2025-12-03", "2025-12-04", "blocked")

    assert availability.enumerate_available_dates(engine, "2025-12-01", "2025-12-31") == []


@pytest.mark.integration
def test_enumerate_can_be_scoped_to_one_host(
    engine: Engine, host_id: str, make_host, owner_id
) -> None:
    other_host = make_host(owner_id, "City Flat")
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-01")
    availability.add_interval(engine, other_host, "2025-12-02", "2025-12-02")

    days = availability.enumerate_available_dates(
        engine, "2025-12-01", "2025-12-31", host_id=other_host
    )

    assert days == [date(2025, 12, 2)]


@pytest.mark.integration
def test_enumerate_rejects_reversed_window(engine: Engine) -> None:
    with pytest.raises(InvalidRange):
        availability.enumerate_available_dates(engine, "2025-12-02", "2025-12-01")


@pytest.mark.integration
def test_enumerate_rejects_window_longer_than_limit(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "0001-01-01", "9999-12-31")

    with pytest.raises(InvalidRange):
        availability.enumerate_available_dates(engine, "0001-01-01", "9999-12-31")


@pytest.mark.integration
def test_enumerate_accepts_window_at_limit(engine: Engine, host_id: str, monkeypatch) -> None:
    monkeypatch.setattr(availability, "MAX_DATE_WINDOW_DAYS", 10)
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-31")

    assert len(availability.enumerate_available_dates(engine, "2025-12-01", "2025-12-10")) == 10
    with pytest.raises(InvalidRange):
        availability.enumerate_available_dates(engine, "2025-12-01", "2025-12-11")


@pytest.mark.integration
def test_search_returns_each_host_once_ordered_by_name(
    engine: Engine, make_host, owner_id
) -> None:
    zebra = make_host(owner_id, "Zebra Lodge", location="Savanna")
    alpine = make_host(owner_id, "Alpine Hut", location="Alps")
    closed = make_host(owner_id, "Closed Barn", location="Farm")
    for start, end in [("2025-12-01", "2025-12-05"), ("2025-12-03", "2025-12-09"), ("2025-12-04", "2025-12-04")]:
        availability.add_interval(engine, zebra, start, end)
    availability.add_interval(engine, alpine, "2025-12-06", "2025-12-20")
    availability.add_interval(engine, closed, "2025-12-01", "2025-12-31", "blocked")

    hosts = availability.search_available_hosts(engine, "2025-12-04", "2025-12-07")

    assert [host["id"] for host in hosts] == [alpine, zebra]


@pytest.mark.integration
def test_search_applies_text_filter_to_name_description_location(
    engine: Engine, make_host, owner_id
) -> None:
    by_name = make_host(owner_id, "Beach Bungalow")
    by_description = make_host(owner_id, "Cottage", description="steps from the beach")
    by_location = make_host(owner_id, "Loft", location="Long Beach")
    unrelated = make_host(owner_id, "Mountain Cabin")
    for host in (by_name, by_description, by_location, unrelated):
        availability.add_interval(engine, host, "2025-12-01", "2025-12-31")

    hosts = availability.search_available_hosts(engine, "2025-12-10", "2025-12-10", "beach")

    assert {host["id"] for host in hosts} == {by_name, by_description, by_location}


@pytest.mark.integration
@pytest.mark.parametrize("text", ["%", "_", "Lake%House"])
def test_search_treats_like_wildcards_literally(engine: Engine, host_id: str, text: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-31")

    assert availability.search_available_hosts(engine, "2025-12-10", "2025-12-10", text) == []


@pytest.mark.integration
def test_search_matches_literal_percent_in_name(engine: Engine, make_host, owner_id) -> None:
    discounted = make_host(owner_id, "Cabin 50% Off")
    availability.add_interval(engine, discounted, "2025-12-01", "2025-12-31")

    hosts = availability.search_available_hosts(engine, "2025-12-10", "2025-12-10", "50%")

    assert [host["id"] for host in hosts] == [discounted]


@pytest.mark.integration
def test_search_with_no_open_hosts_is_empty(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-01-01", "2025-01-31")

    assert availability.search_available_hosts(engine, "2025-12-01", "2025-12-31", "lake") == []


@pytest.mark.integration
def test_available_intervals_on_day_include_host_details(engine: Engine, host_id: str) -> None:
    availability.add_interval(engine, host_id, "2025-12-01", "2025-12-10")
    availability.add_interval(engine, host_id, "2025-12-11", "2025-12-12")

    rows = availability.available_intervals_on(engine, "2025-12-10")

    assert len(rows) == 1
    assert rows[0]["host_name"] == "Lake House"
    assert rows[0]["host_location"] == "Tahoe"
