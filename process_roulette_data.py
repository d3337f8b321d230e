#!/usr/bin/env python3

"""
process_roulette_data.py

Usage:
  # Fetch the casinoscores feed once and load new settled rounds
  python process_roulette_data.py

Exit code 0 on success, 1 on any failure (missing DATABASE_URL included).
"""

import json
import sys

from common.config import get_settings
from common.logging_config import setup_logging
from data_sources.rdbms import create_db_engine
from warehouse.etl import process_roulette_data


def main() -> int:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        print("🚀 Starting roulette data processing...")
        engine = create_db_engine(settings)
        try:
            result = process_roulette_data(engine, settings=settings)
        finally:
            engine.dispose()
        print("🎉 Roulette data processed successfully!")
        print(json.dumps(result, indent=2))
        return 0
    except Exception as e:
        print(f"💥 Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
