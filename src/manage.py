"""Storefront database management CLI.

Creates and drops the relational schema and loads the sample catalogue.
Schema commands are no-ops while the domain uses the in-memory provider.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load sample categories and products
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    print("Setting up storefront database schema...")
    setup_db(_initialized_domain())
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    print("Dropping storefront database schema...")
    drop_db(_initialized_domain())
    print("Done.")


def seed():
    from storefront.catalogue.seed import seed_catalogue

    domain = _initialized_domain()
    with domain.domain_context():
        created = seed_catalogue()
    print(f"Seeded {created['categories']} categories and {created['products']} products.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the sample catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
