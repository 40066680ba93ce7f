"""Reviews database management CLI.

Creates and drops the tables of the reviews domain when it is configured
with a relational provider (sqlite or postgresql). With the default memory
provider both commands are no-ops.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

import structlog

logger = structlog.get_logger(__name__)


def setup_databases() -> list[str]:
    """Create the database schema for the reviews domain."""
    from reviews.domain import reviews
    from reviews.utils.db import setup_db

    reviews.init()
    prepared = setup_db(reviews)
    logger.info("schema_ready", domain=reviews.name, providers=prepared)
    return prepared


def drop_databases() -> None:
    """Drop the database schema for the reviews domain."""
    from reviews.domain import reviews
    from reviews.utils.db import drop_db

    reviews.init()
    drop_db(reviews)
    logger.info("schema_dropped", domain=reviews.name)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reviews database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
