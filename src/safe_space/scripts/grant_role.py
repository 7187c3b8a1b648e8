"""Grant a moderator or admin role to a user.

Usage: python -m safe_space.scripts.grant_role <user-id> admin --by <granter-id>
"""
from __future__ import annotations

import argparse
import sys

from safe_space.core.errors import SafeSpaceError
from safe_space.core.identifiers import parse_identifier, parse_optional_identifier
from safe_space.core.policy import Role
from safe_space.core.settings import get_settings
from safe_space.db.session import Database
from safe_space.repositories.role_repo import RoleRepository


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Store a role for a user")
    parser.add_argument("user_id", help="Identity provider id of the user")
    parser.add_argument("role", choices=[role.value for role in Role])
    parser.add_argument("--by", dest="granted_by", default=None, help="Id of the granting admin")
    parser.add_argument("--url", default=None, help="Override database URL")
    args = parser.parse_args(argv)

    settings = get_settings()
    database = Database(args.url or settings.database_url, echo=settings.sql_debug)
    session = database.session()
    try:
        user_id = parse_identifier(args.user_id, "user_id")
        granted_by = parse_optional_identifier(args.granted_by, "granted_by")
        row = RoleRepository(session).assign(user_id, Role(args.role), granted_by=granted_by)
    except SafeSpaceError as exc:
        print(f"[grant_role] ERROR: {exc.message}", file=sys.stderr)
        return 1
    finally:
        session.close()
        database.dispose()
    print(f"[grant_role] {row.user_id} is now {row.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
