"""Best-effort recording of job failures into ``error_logs``.

Suppression policy: an error is not recorded again while a row with the same
``error_message`` exists within the suppression window (24 hours by default).
Different messages are always recorded.
"""

import datetime
import logging
import traceback

from sqlalchemy import insert, select

from data_sources.model import error_logs
from data_sources.rdbms import utc_now

logger = logging.getLogger(__name__)


def format_stack(error):
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


def record_error(engine, error, context, clock=utc_now, window_hours=24):
    """
    Store ``error`` unless the same message was stored within ``window_hours``.
    Never raises: a failure to record is only logged, so the caller's original
    error is the one that propagates. Returns True when a row was written.
    """
    message = str(error) or type(error).__name__
    since = clock() - datetime.timedelta(hours=window_hours)

    try:
        with engine.begin() as conn:
            recent = conn.execute(
                select(error_logs.c.id)
                .where(error_logs.c.error_message == message, error_logs.c.created_at > since)
                .limit(1)
            ).first()
            if recent is not None:
                logger.info("Suppressed duplicate error for %s (already logged within %dh)", context, window_hours)
                return False

            conn.execute(
                insert(error_logs).values(
                    error_message=message,
                    error_stack=format_stack(error),
                    context=context,
                    created_at=clock(),
                )
            )
    except Exception:
        logger.exception("Failed to record error in error_logs (context=%s): %s", context, message)
        return False

    return True
