"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import Database
from app.core.errors import DuplicateUsernameError, StoreUnavailableError
from app.models.user import Role
from app.services.user_store import UserStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Political Gossips API user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.EDITOR.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    database = Database.from_settings(settings)
    db = database.session()
    try:
        store = UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)
        store.create_user(username, args.password, args.role)
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    except DuplicateUsernameError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    except StoreUnavailableError as e:
        print(f"Database unavailable: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
