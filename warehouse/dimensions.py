"""Get-or-create for the casino dimension.

A casino is looked up by its natural key (table_id, table_name). Creation goes
through ``INSERT ... ON CONFLICT (table_id) DO NOTHING RETURNING id`` so that two
overlapping runs racing on the same table never fail: whoever loses the race gets
no id back and simply re-reads the winner's row.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Tuple

from sqlalchemy import select
from sqlalchemy.engine import Engine

from common.exceptions import IntegrityError
from data_sources.model import casino
from data_sources.rdbms import upsert_insert

logger = logging.getLogger(__name__)

CasinoKey = Tuple[str, str]


def get_or_create_casino(engine: Engine, table_id: str, table_name: str) -> int:
    """Return the surrogate id for (table_id, table_name), creating the row if needed."""
    with engine.begin() as conn:
        existing = conn.execute(
            select(casino.c.id).where(
                casino.c.table_id == table_id,
                casino.c.table_name == table_name,
            )
        ).scalar_one_or_none()
        if existing is not None:
            return existing

        stmt = (
            upsert_insert(engine, casino)
            .values(table_id=table_id, table_name=table_name)
            .on_conflict_do_nothing(index_elements=[casino.c.table_id])
            .returning(casino.c.id)
        )
        created = conn.execute(stmt).scalar_one_or_none()
        if created is not None:
            logger.info("Created casino %s (%s) with id %s", table_id, table_name, created)
            return created

        # Conflict on table_id: a concurrent run created it, or the name changed upstream.
        row = conn.execute(
            select(casino.c.id, casino.c.table_name).where(casino.c.table_id == table_id)
        ).one_or_none()

    if row is None:
        raise IntegrityError(
            f"Casino {table_id} conflicted on insert but could not be read back",
            details={"table_id": table_id, "table_name": table_name},
        )
    if row.table_name != table_name:
        logger.warning(
            "Casino %s is stored as %r but upstream now reports %r; reusing id %s",
            table_id, row.table_name, table_name, row.id,
        )
    return row.id


def resolve_casinos(engine: Engine, keys: Iterable[CasinoKey], max_workers: int = 8) -> Dict[CasinoKey, int]:
    """
    Resolve every distinct (table_id, table_name) pair concurrently.
    All lookups are submitted first and then awaited together.
    """
    distinct = list(dict.fromkeys(keys))
    if not distinct:
        return {}

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(distinct)))) as executor:
        futures = {key: executor.submit(get_or_create_casino, engine, *key) for key in distinct}
        return {key: future.result() for key, future in futures.items()}
