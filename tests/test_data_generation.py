import datetime

import pytz

from data_generation.clear_db import clear_roulette_tables
from data_generation.populate_db import fake_roulette_payload, outcome_for
from data_sources.model import casino, roulette_events
from data_sources.schemas import validate_events
from presentation.roulette_samples import color_distribution, latest_rounds
from warehouse.etl import ingest

START = datetime.datetime(2025, 6, 15, 8, 0, tzinfo=pytz.UTC)


def test_outcome_follows_the_wheel():
    assert outcome_for(0) == {"number": 0, "type": "Even", "color": "Green"}
    assert outcome_for(32) == {"number": 32, "type": "Even", "color": "Red"}
    assert outcome_for(35) == {"number": 35, "type": "Odd", "color": "Black"}


def test_fake_payload_matches_feed_schema():
    payload = fake_roulette_payload(40, start=START, seed=7)

    events = validate_events(payload)

    assert len(events) == 40
    assert len({e.data.id for e in events}) == 40
    assert all(e.data.settled_at > e.data.started_at for e in events)


def test_fake_payload_is_reproducible_with_seed():
    assert fake_roulette_payload(5, start=START, seed=3) == fake_roulette_payload(5, start=START, seed=3)


def test_fake_payload_ingests_only_resolved_rounds(engine, clock, count_rows):
    payload = fake_roulette_payload(60, start=START, seed=11)
    resolved = sum(1 for e in payload if e["data"]["status"] == "Resolved")

    assert ingest(payload, engine, clock=clock) == {"processed": resolved}
    assert count_rows(roulette_events) == resolved


def test_presentation_reports(engine, clock, make_event):
    ingest([
        make_event("r1", settled_at="2025-06-15T10:00:00Z", number=32, parity="Even", color="Red"),
        make_event("r2", settled_at="2025-06-15T10:01:00Z", number=35, parity="Odd", color="Black"),
        make_event("r3", settled_at="2025-06-15T10:02:00Z", number=1, parity="Odd", color="Red"),
    ], engine, clock=clock)

    latest = latest_rounds(engine, limit=2)
    assert list(latest["event_id"]) == ["r3", "r2"]
    assert set(latest["table_name"]) == {"Mega Roulette"}

    colors = color_distribution(engine)
    assert colors.loc["Mega Roulette", "Red"] == 2
    assert colors.loc["Mega Roulette", "Black"] == 1


def test_clear_roulette_tables(engine, clock, make_event, count_rows):
    ingest([make_event("r1")], engine, clock=clock)

    clear_roulette_tables(engine)

    assert count_rows(roulette_events) == 0
    assert count_rows(casino) == 0
