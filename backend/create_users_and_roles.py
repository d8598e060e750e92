"""
Assign roles to auth-service accounts.

Looks each email up through the auth admin API and upserts the local
users row with the requested role.

Usage:
    python create_users_and_roles.py --superadmin boss@example.com --reader viewer@example.com
"""
import sys
import os
from argparse import ArgumentParser

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import httpx
from jet_finances.core.config import settings
from jet_finances.core.exceptions import AuthServiceError
from jet_finances.core.logging_config import configure_logging
from jet_finances.db.session import SessionLocal
from jet_finances.models.user import User, UserRole
from jet_finances.services import auth_service


def assign_role(db, client: httpx.Client, email: str, role: UserRole) -> bool:
    """Upsert the local profile of one account; False when the account is unknown."""
    auth_user = auth_service.find_user_by_email(email, client=client)
    if auth_user is None:
        print(f"  ! {email}: no such auth user, skipping")
        return False

    user = db.query(User).filter(
        (User.auth_id == auth_user["id"]) | (User.email == email)
    ).first()
    if user:
        user.auth_id = auth_user["id"]
        user.role = role
        print(f"  ✓ {email}: role set to {role.value}")
    else:
        db.add(User(auth_id=auth_user["id"], email=email, role=role))
        print(f"  ✓ {email}: created with role {role.value}")
    return True


def main() -> int:
    parser = ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--superadmin", action="append", default=[], metavar="EMAIL")
    parser.add_argument("--reader", action="append", default=[], metavar="EMAIL")
    args = parser.parse_args()

    if not args.superadmin and not args.reader:
        parser.error("give at least one --superadmin or --reader email")

    configure_logging()
    assignments = [(email, UserRole.SUPERADMIN) for email in args.superadmin]
    assignments += [(email, UserRole.READER) for email in args.reader]

    db = SessionLocal()
    failures = 0
    try:
        with httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            for email, role in assignments:
                if not assign_role(db, client, email.strip().lower(), role):
                    failures += 1
        db.commit()
    except AuthServiceError as e:
        db.rollback()
        print(f"Auth service error: {e}")
        return 1
    finally:
        db.close()

    print(f"\nDone: {len(assignments) - failures} assigned, {failures} skipped")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
