"""ShopForm database management CLI.

Creates and drops the relational schema used by the production config.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from shopform.domain import shopform
    from shopform.utils.db import setup_db

    print("Initializing shopform domain...")
    shopform.init()
    print("Creating shopform database schema...")
    setup_db(shopform)
    print("Done.")


def drop_database():
    from shopform.domain import shopform
    from shopform.utils.db import drop_db

    print("Initializing shopform domain...")
    shopform.init()
    print("Dropping shopform database schema...")
    drop_db(shopform)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="ShopForm database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
