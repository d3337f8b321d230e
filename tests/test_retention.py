import datetime

import pytest
import pytz
from sqlalchemy import create_engine, select

from common.config import Settings
from common.exceptions import StorageError
from data_sources.model import error_logs, roulette_events
from warehouse.etl import ingest
from warehouse.retention import cleanup_old_roulette_events, prune, subtract_months

NOW = datetime.datetime(2025, 6, 15, 12, 0, tzinfo=pytz.UTC)


def _at(moment):
    return lambda: moment


@pytest.mark.parametrize(
    "moment, months, expected",
    [
        (datetime.datetime(2025, 6, 15, 12, 0), 3, datetime.datetime(2025, 3, 15, 12, 0)),
        (datetime.datetime(2025, 5, 31), 3, datetime.datetime(2025, 2, 28)),
        (datetime.datetime(2024, 5, 31), 3, datetime.datetime(2024, 2, 29)),
        (datetime.datetime(2025, 1, 15), 3, datetime.datetime(2024, 10, 15)),
        (datetime.datetime(2025, 3, 31), 1, datetime.datetime(2025, 2, 28)),
    ],
)
def test_subtract_months_uses_calendar_months(moment, months, expected):
    assert subtract_months(moment, months) == expected


def test_subtract_months_keeps_timezone():
    assert subtract_months(NOW, 3).tzinfo is NOW.tzinfo


def test_prune_deletes_only_rows_older_than_three_months(engine, make_event, count_rows):
    four_months_ago = datetime.datetime(2025, 2, 15, 12, 0, tzinfo=pytz.UTC)
    one_month_ago = datetime.datetime(2025, 5, 15, 12, 0, tzinfo=pytz.UTC)
    ingest([make_event("old", settled_at="2025-02-15T11:00:00Z")], engine, clock=_at(four_months_ago))
    ingest([make_event("recent", settled_at="2025-05-15T11:00:00Z")], engine, clock=_at(one_month_ago))

    result = prune(engine, clock=_at(NOW))

    assert result == {"deleted": 1}
    with engine.connect() as conn:
        remaining = conn.execute(select(roulette_events.c.event_id)).scalars().all()
    assert remaining == ["recent"]


def test_prune_is_idempotent(engine, make_event):
    ingest([make_event("old")], engine, clock=_at(datetime.datetime(2024, 12, 1, tzinfo=pytz.UTC)))

    assert prune(engine, clock=_at(NOW)) == {"deleted": 1}
    assert prune(engine, clock=_at(NOW)) == {"deleted": 0}


def test_prune_on_missing_table_raises_storage_error(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")

    with pytest.raises(StorageError):
        prune(engine, clock=_at(NOW))


def test_cleanup_uses_configured_retention(engine, make_event):
    ingest([make_event("r1")], engine, clock=_at(datetime.datetime(2025, 4, 1, tzinfo=pytz.UTC)))
    settings = Settings(_env_file=None, DATABASE_URL="sqlite://", RETENTION_MONTHS=1)

    assert cleanup_old_roulette_events(engine, clock=_at(NOW), settings=settings) == {"deleted": 1}


def test_cleanup_records_failure_and_reraises(engine, monkeypatch):
    def broken_prune(*args, **kwargs):
        raise StorageError("Failed to delete old roulette events", operation="prune")

    monkeypatch.setattr("warehouse.retention.prune", broken_prune)
    settings = Settings(_env_file=None, DATABASE_URL="sqlite://")

    with pytest.raises(StorageError):
        cleanup_old_roulette_events(engine, clock=_at(NOW), settings=settings)

    with engine.connect() as conn:
        contexts = conn.execute(select(error_logs.c.context)).scalars().all()
    assert contexts == ["cleanupOldRouletteEvents"]
