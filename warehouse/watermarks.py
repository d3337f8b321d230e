import logging

from sqlalchemy import func, select

from data_sources.model import casino, roulette_events
from data_sources.rdbms import as_utc

logger = logging.getLogger(__name__)


def resolve_watermarks(engine, table_ids):
    """
    Latest persisted settled_at per table_id, in a single grouped query.
    Tables with no stored rounds are absent from the result.
    """
    wanted = sorted(set(table_ids))
    if not wanted:
        return {}

    stmt = (
        select(casino.c.table_id, func.max(roulette_events.c.settled_at).label("latest_settled_at"))
        .select_from(roulette_events.join(casino, roulette_events.c.casino_id == casino.c.id))
        .where(casino.c.table_id.in_(wanted))
        .group_by(casino.c.table_id)
    )

    with engine.connect() as conn:
        rows = conn.execute(stmt).all()

    watermarks = {row.table_id: as_utc(row.latest_settled_at) for row in rows if row.latest_settled_at is not None}
    logger.debug("Resolved watermarks for %d/%d tables", len(watermarks), len(wanted))
    return watermarks
