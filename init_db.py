#!/usr/bin/env python3
# init_db.py

from common.config import get_settings
from data_sources.rdbms import create_db_engine, init_db


def main():
    engine = create_db_engine(get_settings(), echo=True)

    # casino, roulette_events and error_logs (CREATE TABLE IF NOT EXISTS)
    init_db(engine)
    print("✅ Roulette tables created successfully.")


if __name__ == "__main__":
    main()
