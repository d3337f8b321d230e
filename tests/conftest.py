"""Pytest configuration and fixtures."""

import datetime

import pytest
import pytz
from sqlalchemy import create_engine, func, select

from common.config import Settings
from data_sources.rdbms import init_db

NOW = datetime.datetime(2025, 6, 15, 12, 0, 0, tzinfo=pytz.UTC)


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite store so worker threads share the same database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'roulette.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'roulette.db'}",
        MAX_WORKERS=4,
    )


@pytest.fixture
def make_event():
    """Factory for one event shaped like the upstream feed."""

    def _make(
        event_id,
        table_id="204",
        table_name="Mega Roulette",
        status="Resolved",
        settled_at="2025-06-15T10:00:20Z",
        number=35,
        parity="Odd",
        color="Black",
    ):
        settled = datetime.datetime.fromisoformat(settled_at.replace("Z", "+00:00"))
        started = settled - datetime.timedelta(seconds=20)
        return {
            "id": f"evt-{event_id}",
            "data": {
                "id": event_id,
                "startedAt": started.isoformat(),
                "settledAt": settled_at,
                "status": status,
                "gameType": "roulette",
                "table": {"id": table_id, "name": table_name},
                "result": {
                    "outcome": {"number": number, "type": parity, "color": color},
                    "luckyNumbersList": [{"number": 7, "roundedMultiplier": 100}],
                },
            },
        }

    return _make


@pytest.fixture
def count_rows(engine):
    def _count(table):
        with engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar_one()

    return _count
