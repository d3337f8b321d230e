"""
etl.py

Incremental load of settled roulette rounds into the roulette store.

Each run:
  1. ensures the tables exist
  2. validates the upstream payload
  3. reads the per-table watermark (latest stored settled_at)
  4. keeps only "Resolved" rounds newer than their table's watermark
  5. gets-or-creates the casino rows those rounds reference
  6. builds one fact row per admitted round
  7. bulk-inserts the facts with ON CONFLICT (event_id) DO NOTHING

The watermark is what keeps reruns from re-admitting stored rounds; the
event_id conflict guard covers overlapping runs that read the same watermark.
Casino rows created in step 5 stay even if step 7 fails.
"""

import datetime
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from common.config import Settings, get_settings
from common.exceptions import IntegrityError, StorageError
from data_sources.casinoscores import fetch_roulette_events
from data_sources.model import roulette_events
from data_sources.rdbms import driver_message, init_db, upsert_insert, utc_now
from data_sources.schemas import validate_events
from warehouse.dimensions import resolve_casinos
from warehouse.error_log import record_error
from warehouse.watermarks import resolve_watermarks

logger = logging.getLogger(__name__)

RESOLVED_STATUS = "Resolved"
INGEST_CONTEXT = "processRouletteData"


@contextmanager
def _storage_step(operation):
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"{operation} failed: {driver_message(exc)}", operation=operation) from exc


def _casino_key(event):
    return (event.data.table.id, event.data.table.name)


# ───────────── Filter ────────────────────────────────────────────────────────────
def filter_events(events, watermarks):
    """
    Keep rounds whose status is exactly "Resolved" and whose settled_at is
    strictly newer than their table's watermark (or whose table has none).
    """
    admitted = []
    for event in events:
        if event.data.status != RESOLVED_STATUS:
            continue
        latest = watermarks.get(event.data.table.id)
        if latest is None or event.data.settled_at > latest:
            admitted.append(event)
    return admitted


# ───────────── Fact rows ─────────────────────────────────────────────────────────
def build_fact_rows(events, casino_ids, created_at):
    rows = []
    for event in events:
        data = event.data
        casino_id = casino_ids.get(_casino_key(event))
        if casino_id is None:
            raise IntegrityError(
                f"No casino resolved for event {data.id}",
                details={"table_id": data.table.id, "table_name": data.table.name},
            )
        rows.append({
            "event_id":       data.id,
            "started_at":     data.started_at,
            "settled_at":     data.settled_at,
            "outcome_number": data.result.outcome.number,
            "outcome_type":   data.result.outcome.type,
            "outcome_color":  data.result.outcome.color,
            "casino_id":      casino_id,
            "created_at":     created_at,
        })
    return rows


def insert_fact_rows(engine, rows):
    """Single multi-row INSERT; duplicate event_ids are skipped. Returns rows inserted."""
    if not rows:
        return 0
    stmt = (
        upsert_insert(engine, roulette_events)
        .values(rows)
        .on_conflict_do_nothing(index_elements=[roulette_events.c.event_id])
    )
    with engine.begin() as conn:
        result = conn.execute(stmt)
    return max(result.rowcount, 0)


# ───────────── Pipeline ──────────────────────────────────────────────────────────
def ingest(
    raw_payload: Any,
    engine: Engine,
    clock: Callable[[], datetime.datetime] = utc_now,
    max_workers: int = 8,
    strict: bool = True,
) -> Dict[str, int]:
    """
    Load one upstream payload. Returns {"processed": n} where n is the number of
    rounds that passed the filter, not necessarily the number newly inserted.
    """
    with _storage_step("create tables"):
        init_db(engine)

    events = validate_events(raw_payload, strict=strict)

    with _storage_step("resolve watermarks"):
        watermarks = resolve_watermarks(engine, {event.data.table.id for event in events})

    to_ingest = filter_events(events, watermarks)
    logger.info("%d of %d roulette events admitted past status/watermark filter", len(to_ingest), len(events))
    if not to_ingest:
        return {"processed": 0}

    with _storage_step("resolve casinos"):
        casino_ids = resolve_casinos(engine, [_casino_key(event) for event in to_ingest], max_workers=max_workers)

    rows = build_fact_rows(to_ingest, casino_ids, created_at=clock())

    with _storage_step("insert roulette events"):
        inserted = insert_fact_rows(engine, rows)

    if inserted != len(rows):
        logger.info("Inserted %d roulette events (%d already stored)", inserted, len(rows) - inserted)
    else:
        logger.info("Inserted %d roulette events", inserted)
    return {"processed": len(to_ingest)}


def process_roulette_data(
    engine: Engine,
    fetch: Callable[[], Any] = fetch_roulette_events,
    clock: Callable[[], datetime.datetime] = utc_now,
    settings: Optional[Settings] = None,
) -> Dict[str, int]:
    """
    Fetch the feed and ingest it. Any failure is recorded in error_logs
    (best effort) and then re-raised to the caller.
    """
    settings = settings or get_settings()
    try:
        payload = fetch()
        return ingest(
            payload,
            engine,
            clock=clock,
            max_workers=settings.MAX_WORKERS,
            strict=settings.STRICT_VALIDATION,
        )
    except Exception as exc:
        logger.error("Error processing roulette data: %s", exc)
        record_error(engine, exc, INGEST_CONTEXT, clock=clock, window_hours=settings.ERROR_SUPPRESSION_HOURS)
        raise
