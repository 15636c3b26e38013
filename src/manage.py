"""Shop database management CLI.

Creates and drops the SQL schema for the shop domain, including the unique
index on member names. The in-memory provider needs neither.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the shop database schema."""
    from shop.domain import shop
    from shop.utils.db import setup_db

    print("Initializing shop domain...")
    shop.init()
    print("Creating shop database schema...")
    setup_db(shop)
    print("Done.")


def drop_databases():
    """Drop the shop database schema."""
    from shop.domain import shop
    from shop.utils.db import drop_db

    print("Initializing shop domain...")
    shop.init()
    print("Dropping shop database schema...")
    drop_db(shop)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Shop database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
