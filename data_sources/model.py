#!/usr/bin/env python3
# model.py

"""
Table definitions for the roulette store.

  casino           – one row per game table seen upstream (the dimension)
  roulette_events  – one row per settled round (the fact)
  error_logs       – failures recorded by the jobs, with 24h suppression

References:
- SQLAlchemy Table and Column docs:
  https://docs.sqlalchemy.org/en/20/core/metadata.html#sqlalchemy.schema.Table
"""

from sqlalchemy import (
    MetaData,
    Table,
    Column,
    Index,
    Integer,
    Text,
    DateTime,
    ForeignKey,
    func,
)

metadata = MetaData()

# ───────────── 1) DIMENSION: casino ────────────────────────────────────────────
casino = Table(
    "casino", metadata,
    Column("id",         Integer, primary_key=True, autoincrement=True),
    Column("table_id",   Text,    nullable=False, unique=True),
    Column("table_name", Text,    nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)

# ───────────── 2) FACT: roulette_events ────────────────────────────────────────
roulette_events = Table(
    "roulette_events", metadata,
    Column("id",             Integer, primary_key=True, autoincrement=True),
    Column("event_id",       Text,    nullable=False, unique=True),
    Column("started_at",     DateTime(timezone=True), nullable=False),
    Column("settled_at",     DateTime(timezone=True), nullable=False),
    Column("outcome_number", Integer, nullable=False),
    Column("outcome_type",   Text,    nullable=False),
    Column("outcome_color",  Text,    nullable=False),

    # FK → casino
    Column("casino_id", Integer, ForeignKey("casino.id")),

    Column("created_at", DateTime(timezone=True), server_default=func.now()),

    # retention deletes scan created_at, watermarks join on casino_id
    Index("ix_roulette_events_created_at", "created_at"),
    Index("ix_roulette_events_casino_id", "casino_id"),
)

# ───────────── 3) error_logs ───────────────────────────────────────────────────
error_logs = Table(
    "error_logs", metadata,
    Column("id",            Integer, primary_key=True, autoincrement=True),
    Column("error_message", Text,    nullable=False),
    Column("error_stack",   Text),
    Column("context",       Text),
    Column("created_at",    DateTime(timezone=True), server_default=func.now()),
)
