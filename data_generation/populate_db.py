#!/usr/bin/env python3
# populate_db.py

"""
Generate synthetic casinoscores payloads and load them through the real
ingestion pipeline, for local demos without hitting the upstream API.

  - Rounds are spread over a handful of game tables, settled ~30s apart.
  - Outcome colour/parity follow the European wheel (0 is Green).
  - A small share of rounds is left "Open" / "Cancelled" so the status
    filter has something to drop.

Usage:
  python data_generation/populate_db.py [batches] [events_per_batch]
"""

import datetime
import random
import sys
from typing import Any, Dict, List, Optional

import pytz
from faker import Faker
from tqdm import trange

from common.config import get_settings
from data_sources.rdbms import create_db_engine
from warehouse.etl import ingest

RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}

DEFAULT_TABLES = [
    ("204", "Mega Roulette"),
    ("205", "Lightning Roulette"),
    ("206", "Auto Roulette"),
]

STATUS_WEIGHTS = {"Resolved": 0.9, "Open": 0.05, "Cancelled": 0.05}


def outcome_for(number: int) -> Dict[str, Any]:
    if number == 0:
        color = "Green"
    elif number in RED_NUMBERS:
        color = "Red"
    else:
        color = "Black"
    return {"number": number, "type": "Even" if number % 2 == 0 else "Odd", "color": color}


def fake_roulette_payload(
    count: int,
    tables: Optional[List[tuple]] = None,
    start: Optional[datetime.datetime] = None,
    seed: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Build ``count`` events shaped exactly like the upstream feed (camelCase keys,
    ISO-8601 timestamps). Passing ``seed`` makes the output reproducible.
    """
    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    tables = tables or DEFAULT_TABLES
    start = start or datetime.datetime.now(pytz.UTC) - datetime.timedelta(seconds=30 * count)
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())

    events = []
    for i in range(count):
        table_id, table_name = rng.choice(tables)
        started_at = start + datetime.timedelta(seconds=30 * i)
        settled_at = started_at + datetime.timedelta(seconds=rng.randint(15, 25))
        lucky = [
            {"number": n, "roundedMultiplier": rng.choice([50, 100, 200, 300, 500])}
            for n in rng.sample(range(37), rng.randint(1, 5))
        ]
        round_id = fake.hexify(text="^^^^^^^^^^^^^^^^^^^^^^^^")
        events.append({
            "id": fake.uuid4(),
            "data": {
                "id": round_id,
                "startedAt": started_at.isoformat(),
                "settledAt": settled_at.isoformat(),
                "status": rng.choices(statuses, weights=weights)[0],
                "gameType": "roulette",
                "table": {"id": table_id, "name": table_name},
                "result": {
                    "outcome": outcome_for(rng.randint(0, 36)),
                    "luckyNumbersList": lucky,
                },
            },
        })
    return events


def populate(batches: int = 10, events_per_batch: int = 50):
    settings = get_settings()
    engine = create_db_engine(settings)
    start = datetime.datetime.now(pytz.UTC) - datetime.timedelta(seconds=30 * batches * events_per_batch)

    total = 0
    for b in trange(batches, desc="Ingesting fake batches"):
        batch_start = start + datetime.timedelta(seconds=30 * b * events_per_batch)
        payload = fake_roulette_payload(events_per_batch, start=batch_start)
        total += ingest(payload, engine, max_workers=settings.MAX_WORKERS)["processed"]

    engine.dispose()
    print(f"✅ Ingested {total} synthetic roulette events in {batches} batches.")


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:3]]
    populate(*args)
