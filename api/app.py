"""
HTTP triggers for the roulette jobs.

  GET /api/score    → fetch and ingest the latest rounds
  GET /api/cleaner  → delete rounds past the retention window

Failures answer 500 with a generic body; details only go to the log and error_logs.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from common.config import get_settings
from common.logging_config import setup_logging
from data_sources.casinoscores import fetch_roulette_events
from data_sources.rdbms import create_db_engine
from warehouse.etl import process_roulette_data
from warehouse.retention import cleanup_old_roulette_events

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    # Raises ConfigError without DATABASE_URL, so the server refuses to start.
    app.state.engine = create_db_engine(settings)
    yield
    app.state.engine.dispose()


app = FastAPI(title="Roulette ingest", lifespan=lifespan)


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_fetcher() -> Callable[[], Any]:
    return fetch_roulette_events


@app.get("/api/score")
def score(engine: Engine = Depends(get_engine), fetch: Callable[[], Any] = Depends(get_fetcher)):
    try:
        result = process_roulette_data(engine, fetch=fetch)
    except Exception:
        logger.exception("Error in score API")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    return {
        "message": "Roulette data processed successfully",
        "processedEvents": result["processed"],
    }


@app.get("/api/cleaner")
def cleaner(engine: Engine = Depends(get_engine)):
    try:
        result = cleanup_old_roulette_events(engine)
    except Exception:
        logger.exception("Error in cleaner API")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    return {
        "message": "Old roulette records cleanup completed",
        "deletedRecords": result["deleted"],
    }
