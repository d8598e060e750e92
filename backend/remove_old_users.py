"""
Remove auth-service accounts that are no longer needed.

Every account whose email is not passed with --keep is deleted from the
auth service together with its local users row.

Usage:
    python remove_old_users.py --keep boss@example.com --keep viewer@example.com [--dry-run]
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
from jet_finances.models.user import User
from jet_finances.services import auth_service


def main() -> int:
    parser = ArgumentParser(description="Remove auth accounts not in the keep list")
    parser.add_argument("--keep", action="append", required=True, metavar="EMAIL")
    parser.add_argument("--dry-run", action="store_true", help="only print what would be removed")
    args = parser.parse_args()

    configure_logging()
    keep = {email.strip().lower() for email in args.keep}

    db = SessionLocal()
    try:
        with httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            users = auth_service.list_users(client=client)
            stale = [u for u in users if (u.get("email") or "").lower() not in keep]

            print(f"{len(users)} auth users, {len(stale)} to remove")
            for auth_user in stale:
                email = auth_user.get("email")
                if args.dry_run:
                    print(f"  would remove {email} ({auth_user['id']})")
                    continue
                auth_service.delete_user(auth_user["id"], client=client)
                db.query(User).filter(User.auth_id == auth_user["id"]).delete()
                print(f"  ✓ removed {email}")
        db.commit()
    except AuthServiceError as e:
        db.rollback()
        print(f"Auth service error: {e}")
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
