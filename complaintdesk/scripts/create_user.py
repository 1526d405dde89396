"""
Create a user (e.g. the first admin). Run from project root:
  python -m complaintdesk.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m complaintdesk.scripts.create_user "Ops Team" ops@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from complaintdesk.core.config import get_settings
from complaintdesk.core.database import SessionLocal
from complaintdesk.core.errors import ConflictError
from complaintdesk.core.logging import configure_logging
from complaintdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, Role
from complaintdesk.services.users import register_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a ComplaintDesk user.")
    parser.add_argument("name", help="Display name (1-100 chars)")
    parser.add_argument("email", help="Email address (login identifier)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    name = args.name.strip()
    if not name or len(name) > 100:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in args.email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        user = register_user(db, name, args.email, args.password, Role(args.role))
    except ConflictError:
        print(f"User '{args.email.strip().lower()}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
