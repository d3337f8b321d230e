"""
retention.py

Deletes roulette_events rows whose created_at is older than N calendar months
(3 by default). Month arithmetic clamps to the target month's length, so
31 May minus 3 months is the last day of February.
"""

import calendar
import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from common.config import get_settings
from common.exceptions import StorageError
from data_sources.model import roulette_events
from data_sources.rdbms import driver_message, utc_now
from warehouse.error_log import record_error

logger = logging.getLogger(__name__)

CLEANUP_CONTEXT = "cleanupOldRouletteEvents"


def subtract_months(moment, months):
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def prune(engine, clock=utc_now, months=3):
    """Delete facts created before now - ``months``; returns {"deleted": n}."""
    cutoff = subtract_months(clock(), months)
    logger.info("Deleting roulette events created before %s", cutoff.isoformat())

    try:
        with engine.begin() as conn:
            result = conn.execute(delete(roulette_events).where(roulette_events.c.created_at < cutoff))
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to delete old roulette events: {driver_message(exc)}", operation="prune") from exc

    deleted = max(result.rowcount, 0)
    logger.info("Cleanup completed: %d old roulette events deleted", deleted)
    return {"deleted": deleted}


def cleanup_old_roulette_events(engine, clock=utc_now, settings=None):
    """
    Retention run used by the script, the HTTP route and the Prefect flow:
    prune, and on failure record the error before re-raising it.
    """
    settings = settings or get_settings()
    try:
        return prune(engine, clock=clock, months=settings.RETENTION_MONTHS)
    except Exception as exc:
        logger.error("Error while cleaning up old roulette events: %s", exc)
        record_error(engine, exc, CLEANUP_CONTEXT, clock=clock, window_hours=settings.ERROR_SUPPRESSION_HOURS)
        raise
