#!/usr/bin/env python3
"""
Database initialization script
Creates the schema and fills an empty database with demo data.
"""
import logging
import sys

from config import load_settings, configure_logging
from core.bakery_app import BakeryApp

logger = logging.getLogger("init_db")


def init_database() -> bool:
    """Seed the configured database, returns False if it was already seeded"""
    settings = load_settings()
    configure_logging(settings.log_level)

    app = BakeryApp(settings.db_path, seed=settings.random_seed)
    created = app.load_data()

    logger.info("Users: %d, orders: %d", app.user_repo.count(), app.order_repo.count())
    return created


def main():
    try:
        init_database()
    except Exception:
        logger.exception("Demo data generation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
