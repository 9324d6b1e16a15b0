"""
Create a user (e.g. the first admin) without the admin registration code. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import AppError
from app.core.logging import setup_logging
from app.models import UserRole
from app.services.credentials import create_account


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Sheetwise user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (6 chars to 72 bytes)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.DEBUG)
    db = SessionLocal()
    try:
        user = create_account(
            db,
            settings,
            name=args.name,
            email=args.email,
            password=args.password,
            role=UserRole(args.role),
        )
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
