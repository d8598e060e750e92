"""
Check connectivity to the database and the auth service.

Usage:
    python check_connections.py
"""
import sys
import os
import asyncio

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.exc import SQLAlchemyError
from jet_finances.core.exceptions import AuthServiceError
from jet_finances.core.logging_config import configure_logging
from jet_finances.db.session import SessionLocal, check_database
from jet_finances.services import auth_service


def check_db() -> bool:
    db = SessionLocal()
    try:
        check_database(db)
        print("✓ Database: connected")
        return True
    except SQLAlchemyError as e:
        print(f"✗ Database: {e}")
        return False
    finally:
        db.close()


def check_auth() -> bool:
    try:
        asyncio.run(auth_service.check_auth_health())
        print("✓ Auth service: reachable")
        return True
    except AuthServiceError as e:
        print(f"✗ Auth service: {e}")
        return False


if __name__ == "__main__":
    configure_logging()
    results = [check_db(), check_auth()]
    sys.exit(0 if all(results) else 1)
