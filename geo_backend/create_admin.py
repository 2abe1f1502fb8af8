"""Create the first admin account, or promote an existing one.

Usage:
    python -m geo_backend.create_admin <email> <password>
"""
import sys

from geo_backend.database import SessionLocal, init_database
from geo_backend.models import location, user  # noqa: F401
from geo_backend.models.user import Role
from geo_backend.stores import identity_store


def ensure_admin(db, email: str, password: str) -> tuple[user.User, bool]:
    """Return the admin account and whether it was newly created."""
    existing = identity_store.find_by_email(db, email)
    if existing is None:
        return identity_store.create_user(db, email, password, role=Role.ADMIN), True

    if not existing.is_admin:
        existing = identity_store.update_role(db, existing.id, Role.ADMIN)
    return existing, False


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: python -m geo_backend.create_admin <email> <password>", file=sys.stderr)
        return 2

    email, password = args
    init_database()
    db = SessionLocal()
    try:
        account, created = ensure_admin(db, email, password)
    finally:
        db.close()

    if created:
        print(f"Created admin account {account.email}")
    else:
        print(f"{account.email} is now an admin")
    return 0


if __name__ == "__main__":
    sys.exit(main())
