"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.expense import Expense
from jet_finances.models.flight import Flight
from jet_finances.models.invoice import Invoice
from jet_finances.models.dictionary import InvoiceType
from jet_finances.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from jet_finances.api.dependencies import get_current_user, require_superadmin
from jet_finances.core.utils import format_response, model_to_dict
from jet_finances.services.activity_service import log_activity, ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE
from jet_finances.services.expense_service import list_expenses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def get_expense_or_404(expense_id: int, db: Session) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


def check_references(data: dict, db: Session) -> None:
    """Ensure linked invoice, flight and invoice type exist."""
    references = (
        ("exp_invoice", Invoice, "Invoice"),
        ("exp_flight", Flight, "Flight"),
        ("exp_invoice_type", InvoiceType, "Invoice type"),
    )
    for field, model, name in references:
        record_id = data.get(field)
        if record_id is not None and not db.query(model).filter(model.id == record_id).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{name} {record_id} does not exist"
            )


def expense_details(expense: Expense) -> Optional[str]:
    """Short description stored with activity log entries."""
    parts = [part for part in (expense.exp_type, expense.exp_subtype, expense.exp_place) if part]
    return " / ".join(parts) or None


@router.get("", response_model=List[ExpenseResponse])
async def get_expenses(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all expenses, newest first, with invoice and flight numbers."""
    return list_expenses(db)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get expense by ID."""
    return get_expense_or_404(expense_id, db)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Create a new expense."""
    data = expense_data.model_dump()
    check_references(data, db)

    expense = Expense(**data)
    db.add(expense)
    db.flush()

    log_activity(
        db, ACTION_CREATE, Expense.__tablename__, expense.id,
        record_details=expense_details(expense),
        new_data=model_to_dict(expense),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(expense)
    return expense


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Update expense fields that were sent."""
    expense = get_expense_or_404(expense_id, db)
    changes = expense_data.model_dump(exclude_unset=True)
    check_references(changes, db)

    period_start = changes.get("exp_period_start", expense.exp_period_start)
    period_end = changes.get("exp_period_end", expense.exp_period_end)
    if period_start and period_end and period_end <= period_start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="exp_period_end must be after exp_period_start"
        )

    old_data = model_to_dict(expense)
    for field, value in changes.items():
        setattr(expense, field, value)
    db.flush()

    log_activity(
        db, ACTION_UPDATE, Expense.__tablename__, expense.id,
        record_details=expense_details(expense),
        old_data=old_data,
        new_data=model_to_dict(expense),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(expense)
    return expense


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense = get_expense_or_404(expense_id, db)
    old_data = model_to_dict(expense)
    details = expense_details(expense)
    db.delete(expense)

    log_activity(
        db, ACTION_DELETE, Expense.__tablename__, expense_id,
        record_details=details,
        old_data=old_data,
        actor=current_user.email,
        request=request
    )
    db.commit()
    return format_response(None, "Expense deleted successfully")
