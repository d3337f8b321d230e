# File: flows/etl_flows.py

from prefect import flow, get_run_logger, serve, task

from common.config import get_settings
from common.logging_config import setup_logging
from data_sources.rdbms import create_db_engine
from notifications.telegram import send_telegram_message, telegram_configured
from warehouse.etl import process_roulette_data
from warehouse.retention import cleanup_old_roulette_events


# ─────────────────────────────────────────────────────────────────────────────
@task(name="notify", retries=0, retry_delay_seconds=0, log_prints=True)
def notify(message: str):
    """
    Send a message to Telegram when a bot is configured. Suppress any errors
    so that a notification problem never fails the flow.
    """
    if not telegram_configured():
        return
    try:
        send_telegram_message(message)
    except Exception as e:
        print(f"⚠️  Telegram notification failed: {e}")


# ─────────────────────────────────────────────────────────────────────────────
@task(name="ingest_roulette_task", retries=0, log_prints=True)
def ingest_roulette() -> dict:
    """
    Fetch the casinoscores feed and load new settled rounds.
    No retries: the next scheduled run picks up whatever this one missed.
    """
    engine = create_db_engine()
    try:
        result = process_roulette_data(engine)
    finally:
        engine.dispose()
    print(f"✅ Roulette ingestion processed {result['processed']} events")
    return result


# ─────────────────────────────────────────────────────────────────────────────
@task(name="cleanup_roulette_task", retries=0, log_prints=True)
def cleanup_roulette() -> dict:
    """
    Delete roulette events older than the retention window.
    """
    engine = create_db_engine()
    try:
        result = cleanup_old_roulette_events(engine)
    finally:
        engine.dispose()
    print(f"🧹 Retention cleanup deleted {result['deleted']} events")
    return result


# ─────────────────────────────────────────────────────────────────────────────
@flow(name="roulette_ingest_flow")
def roulette_ingest_flow() -> dict:
    """
    Runs every few minutes, so only failures are sent to Telegram.
    On exception: send “failure” message and re‐raise.
    """
    logger = get_run_logger()
    try:
        result = ingest_roulette()
    except Exception as e:
        notify(f"❌ Roulette ingestion FAILED\nError: {e}")
        raise
    logger.info("Roulette ingestion finished: %s", result)
    return result


# ─────────────────────────────────────────────────────────────────────────────
@flow(name="roulette_cleanup_flow")
def roulette_cleanup_flow() -> dict:
    """
    1) Send “starting” message to Telegram.
    2) Delete old roulette events.
    3) On success: send “success” message with the deleted count.
    4) On exception: send “failure” message and re‐raise.
    """
    logger = get_run_logger()
    notify("🧹 Starting roulette retention cleanup")
    try:
        result = cleanup_roulette()
    except Exception as e:
        notify(f"❌ Roulette retention cleanup FAILED\nError: {e}")
        raise
    notify(f"✅ Roulette retention cleanup deleted {result['deleted']} events")
    logger.info("Roulette cleanup finished: %s", result)
    return result


# ─────────────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    # -------------------------------------------------------
    # Serve both flows from this process until CTRL+C:
    #   • ingestion every INGEST_INTERVAL_SECONDS
    #   • retention cleanup on CLEANUP_CRON
    # -------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    serve(
        roulette_ingest_flow.to_deployment(
            name="roulette-ingest",
            interval=settings.INGEST_INTERVAL_SECONDS,
            tags=["roulette"],
        ),
        roulette_cleanup_flow.to_deployment(
            name="roulette-cleanup",
            cron=settings.CLEANUP_CRON,
            tags=["roulette"],
        ),
        pause_on_shutdown=False,
    )
