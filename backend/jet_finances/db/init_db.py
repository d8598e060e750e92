"""
Database initialization script.

Usage:
    python -m jet_finances.db.init_db
"""
from jet_finances.db.session import init_db

# Import all models so SQLAlchemy can register them
from jet_finances.models import (  # noqa: F401
    User, Flight, Invoice, Expense, ExpenseType, ExpenseSubtype,
    InvoiceType, ActivityLog, Discrepancy
)

if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
