#!/usr/bin/env python3
"""
Database initialization script.
Run this to create all database tables, optionally seeding demo content
and an initial admin account.

    python -m portal.init_db --seed --admin admin:secret
"""

import argparse
import logging
import os
import sys

from sqlmodel import text

from portal.configs.database import create_db_engine, init_db
from portal.configs.settings import Settings
from portal.errors import PortalError
from portal.services.database_storage import DatabaseStorage
from portal.services.seed_service import seed_demo_data
from portal.services.user_service import create_admin

logger = logging.getLogger("portal.init_db")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create the portal database schema.")
    parser.add_argument("--seed", action="store_true", help="insert demo assignments, notices and events")
    parser.add_argument("--admin", metavar="USERNAME:PASSWORD", help="create an initial admin account")
    parser.add_argument("--admin-name", default="Portal Administrator", help="full name for --admin")
    return parser.parse_args(argv)


def main(argv=None):
    """Initialize the database schema."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    settings = Settings()
    logger.info(f"Environment file: {os.getenv('ENV_FILE', 'Not set')}")

    engine = create_db_engine(settings.database_url, echo=settings.DB_ECHO)
    storage = DatabaseStorage(engine)
    try:
        logger.info("Testing database connection...")
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        init_db(engine)
        logger.info("Database schema created successfully")

        if args.seed:
            seed_demo_data(storage)
        if args.admin:
            username, _, password = args.admin.partition(":")
            if not username or not password:
                logger.error("--admin expects USERNAME:PASSWORD")
                return 2
            admin = create_admin(storage, username, password, args.admin_name)
            logger.info(f"Created admin account {admin.username}")
    except PortalError as e:
        logger.error(f"Error initializing database: {e.message}")
        return 1
    except Exception:
        logger.exception("Error initializing database")
        return 1
    finally:
        storage.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
