"""
Insert historical ground handling expenses.

Each scanned charge is linked to a flight at its station on the service
date and split into arrival/departure halves (landing permits stay whole).

Usage:
    python insert_ground_handling_expenses.py
"""
import sys
import os
from decimal import Decimal

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from jet_finances.core.logging_config import configure_logging
from jet_finances.db.session import SessionLocal
from jet_finances.services.ground_handling import (
    HandlingInvoice,
    insert_ground_handling_expenses,
    summarize_ground_handling,
)

GROUND_HANDLING_INVOICES = [
    HandlingInvoice("OJAM", "USD", Decimal("4200.00"), "AUTOSCAN: Handling-25 JUL24, A6-RTS, OJAM"),
    HandlingInvoice("HEAL", "USD", Decimal("2714.00"), "AUTOSCAN: Handling-19 Jun24, A6-RTS, HEAL-OMDW"),
    HandlingInvoice("OMDW", "USD", Decimal("200.00"), "AUTOSCAN: Landing Permit-17-19 JUL24, A6RTS, OMDW"),
    HandlingInvoice("OMDW", "AED", Decimal("8605.39"), "AUTOSCAN: A6-RTS T#2407-08 Handling"),
    HandlingInvoice("OMDW", "AED", Decimal("9289.03"), "AUTOSCAN: A6-RTS T#2407-08 Handling"),
    HandlingInvoice("LTBA", "USD", Decimal("2318.91"), "AUTOSCAN: Handling-16 Aug24, A6-RTS, LTBA-OMDW"),
    HandlingInvoice("LTFE", "EUR", Decimal("3520.00"), "AUTOSCAN: HANDLING-4 AUG24, A6-RTS, LTFE, OMDW"),
    HandlingInvoice("LTBA", "EUR", Decimal("140.00"), "AUTOSCAN: Arrival-Departure,14 AUG24, A6-RTS, LTBA, OMDW-OMDW"),
    HandlingInvoice("LGKL", "EUR", Decimal("2530.00"), "AUTOSCAN: HANDLING-24-25 JUL24, A6-RTS, LTBS, LGKL-OJAM"),
    HandlingInvoice("LTFE", "EUR", Decimal("140.00"), "AUTOSCAN: Arrival-Departure,4 AUG24, A6-RTS, LTFE, OMDW-OMDW"),
    HandlingInvoice("LTBA", "EUR", Decimal("140.00"), "AUTOSCAN: Arrival-Departure,12 AUG24, A6-RTS, LTBA, OMDB-OMDW"),
    HandlingInvoice("LTBA", "EUR", Decimal("1705.00"), "AUTOSCAN: HANDLING,14 AUG24, A6-RTS, LTBA, OMDW-OMDW"),
    HandlingInvoice("LTBA", "EUR", Decimal("140.00"), "AUTOSCAN: Arrival-Departure,16 AUG24, A6-RTS, LTBA, OMDW-OMDB"),
    HandlingInvoice("LTBA", "EUR", Decimal("2350.00"), "AUTOSCAN: HANDLING,16 AUG24, A6-RTS, LTBA, OMDW-OMDB"),
]


def main() -> int:
    configure_logging()
    db = SessionLocal()
    try:
        print("Starting Ground Handling expenses insertion...")
        inserted, failed = insert_ground_handling_expenses(db, GROUND_HANDLING_INVOICES)
        print(f"\nProcessing complete: {inserted} expenses inserted, {failed} errors")

        print("\nSummary of Ground Handling expenses:")
        for subtype, currency, count, total in summarize_ground_handling(db):
            print(f"  {subtype} ({currency}): {count} records, {total:.2f} total")
        return 1 if failed else 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
