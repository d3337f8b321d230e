#!/usr/bin/env python3
# roulette_samples.py

import pandas as pd
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from common.config import get_settings
from data_sources.model import casino, roulette_events
from data_sources.rdbms import create_db_engine


# ─── FUNCTIONS ────────────────────────────────────────────────────────────────
def latest_rounds(engine: Engine, limit: int = 10) -> pd.DataFrame:
    """
    The `limit` most recently settled rounds, with their table name.
    """
    stmt = (
        select(
            roulette_events.c.event_id,
            casino.c.table_name,
            roulette_events.c.settled_at,
            roulette_events.c.outcome_number,
            roulette_events.c.outcome_type,
            roulette_events.c.outcome_color,
        )
        .join(casino, roulette_events.c.casino_id == casino.c.id)
        .order_by(roulette_events.c.settled_at.desc())
        .limit(limit)
    )
    with engine.connect() as conn:
        return pd.read_sql_query(stmt, conn)


def color_distribution(engine: Engine) -> pd.DataFrame:
    """
    Rounds per outcome colour for every table, one column per colour.
    """
    stmt = (
        select(
            casino.c.table_name,
            roulette_events.c.outcome_color,
            func.count().label("rounds"),
        )
        .join(casino, roulette_events.c.casino_id == casino.c.id)
        .group_by(casino.c.table_name, roulette_events.c.outcome_color)
    )
    with engine.connect() as conn:
        df = pd.read_sql_query(stmt, conn)

    return (
        df.pivot(index="table_name", columns="outcome_color", values="rounds")
        .fillna(0)
        .astype(int)
    )


# ─── MAIN ─────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    engine = create_db_engine(get_settings())

    print("\n--- Latest settled rounds ---")
    print(latest_rounds(engine).to_string(index=False))

    print("\n--- Outcome colours per table ---")
    print(color_distribution(engine).to_string())
