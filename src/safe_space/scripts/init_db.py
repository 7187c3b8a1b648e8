"""Create (or recreate) the tables of the configured database."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from safe_space.core.settings import get_settings
from safe_space.db.session import Database


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the Safe Space tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    database = Database(args.url or settings.database_url, echo=settings.sql_debug)
    try:
        if args.drop_tables:
            database.drop_tables()
            print("[init_db] dropped all tables")
        database.create_tables()
    except SQLAlchemyError as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        database.dispose()
    print("[init_db] database initialized")
    return 0


if __name__ == "__main__":
    sys.exit(main())
