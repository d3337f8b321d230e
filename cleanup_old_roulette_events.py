#!/usr/bin/env python3

"""
cleanup_old_roulette_events.py

Usage:
  # Delete roulette_events rows older than RETENTION_MONTHS (default 3)
  python cleanup_old_roulette_events.py

Exit code 0 on success, 1 on any failure (missing DATABASE_URL included).
"""

import json
import sys

from common.config import get_settings
from common.logging_config import setup_logging
from data_sources.rdbms import create_db_engine
from warehouse.retention import cleanup_old_roulette_events


def main() -> int:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        print("🧹 Starting cleanup of old roulette records...")
        engine = create_db_engine(settings)
        try:
            result = cleanup_old_roulette_events(engine, settings=settings)
        finally:
            engine.dispose()
        print("🎉 Cleanup completed successfully!")
        print(json.dumps(result, indent=2))
        return 0
    except Exception as e:
        print(f"💥 Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
