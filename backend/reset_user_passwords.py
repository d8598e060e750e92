"""
Set a new password for an auth-service account.

Usage:
    python reset_user_passwords.py --email boss@example.com --password 'new-secret'
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
from jet_finances.services import auth_service


def main() -> int:
    parser = ArgumentParser(description="Reset auth account passwords")
    parser.add_argument("--email", action="append", required=True, metavar="EMAIL")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    configure_logging()
    failures = 0
    try:
        with httpx.Client(timeout=settings.AUTH_TIMEOUT_SECONDS) as client:
            for email in args.email:
                auth_user = auth_service.find_user_by_email(email, client=client)
                if auth_user is None:
                    print(f"  ! {email}: no such auth user")
                    failures += 1
                    continue
                auth_service.update_user_password(auth_user["id"], args.password, client=client)
                print(f"  ✓ {email}: password updated")
    except AuthServiceError as e:
        print(f"Auth service error: {e}")
        return 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
