from pathlib import Path

from prefect import flow

from common.config import get_settings

# ─────────────────────────────────────────────────────────────────────────────
# Project root (the directory holding flows/, warehouse/, data_sources/, …).
# Prefect pulls the flow code from here when a worker picks up a run.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = get_settings()

    # 1) Ingestion: every INGEST_INTERVAL_SECONDS
    flow.from_source(
        source=str(PROJECT_ROOT),
        entrypoint="flows/etl_flows.py:roulette_ingest_flow",
    ).deploy(
        name="roulette-ingest",
        interval=settings.INGEST_INTERVAL_SECONDS,
        work_pool_name="default",       # must match your existing pool
        tags=["roulette"],
    )
    print("✅ roulette_ingest_flow deployed as 'roulette-ingest'")

    # 2) Retention cleanup on a daily cron
    flow.from_source(
        source=str(PROJECT_ROOT),
        entrypoint="flows/etl_flows.py:roulette_cleanup_flow",
    ).deploy(
        name="roulette-cleanup",
        cron=settings.CLEANUP_CRON,
        work_pool_name="default",
        tags=["roulette"],
    )
    print("✅ roulette_cleanup_flow deployed as 'roulette-cleanup'")
