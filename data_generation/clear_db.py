#!/usr/bin/env python3
"""
clear_db.py

Usage:
  # Delete all rows (and reset identities on PostgreSQL) in the roulette tables.
  python data_generation/clear_db.py
"""

from sqlalchemy import delete, text
from sqlalchemy.engine import Engine

from common.config import get_settings
from data_sources.model import casino, error_logs, roulette_events
from data_sources.rdbms import create_db_engine


# ───────────── Clear Roulette Tables ────────────────────────────────────────────
def clear_roulette_tables(engine: Engine):
    """
    On PostgreSQL: TRUNCATE ... RESTART IDENTITY CASCADE, so SERIAL ids restart at 1.
    Elsewhere: plain DELETEs, facts first, then dimensions.
    """
    with engine.begin() as conn:
        if engine.dialect.name == "postgresql":
            conn.execute(text("TRUNCATE TABLE roulette_events, casino, error_logs RESTART IDENTITY CASCADE"))
        else:
            conn.execute(delete(roulette_events))
            conn.execute(delete(casino))
            conn.execute(delete(error_logs))


if __name__ == "__main__":
    clear_roulette_tables(create_db_engine(get_settings()))
    print("✅ All roulette tables have been cleared.")
