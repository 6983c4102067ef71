"""
Promote an existing user to the Admin role.

Usage:
    python promote_admin.py <username>

Runs against DATABASE_URL; exits with status 1 when the user or the Admin
role does not exist.
"""

import argparse
import logging
import sys

from app.core.db import SessionLocal
from app.models.role import ADMIN_ROLE
from app.services.admin_service import AdminService

logger = logging.getLogger(__name__)


def promote(db, username: str) -> int:
    user = AdminService.get_user_by_username(db, username)
    if user is None:
        print(f"User '{username}' not found.")
        return 1

    if AdminService.get_role_by_name(db, ADMIN_ROLE) is None:
        print("Admin role not found.")
        return 1

    user = AdminService.promote_to_admin(db, user.id)
    print(f"User '{username}' has been promoted to Admin role.")
    print(f"Current role: {user.role.name}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Promote a TriviaSpark user to the Admin role")
    parser.add_argument("username", help="username of the account to promote")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)

    db = SessionLocal()
    try:
        return promote(db, args.username)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
