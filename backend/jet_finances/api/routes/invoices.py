"""
Invoice management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.invoice import Invoice
from jet_finances.schemas.invoice import InvoiceCreate, InvoiceUpdate, InvoiceResponse
from jet_finances.schemas.expense import ExpenseResponse
from jet_finances.api.dependencies import get_current_user, require_superadmin
from jet_finances.core.utils import format_response, model_to_dict
from jet_finances.services.activity_service import log_activity, ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE
from jet_finances.services.expense_service import list_invoice_expenses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def get_invoice_or_404(invoice_id: int, db: Session) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found"
        )
    return invoice


@router.get("", response_model=List[InvoiceResponse])
async def list_invoices(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all invoices, newest first."""
    return db.query(Invoice).order_by(Invoice.inv_date.desc(), Invoice.id.desc()).all()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get invoice by ID."""
    return get_invoice_or_404(invoice_id, db)


@router.get("/{invoice_id}/expenses", response_model=List[ExpenseResponse])
async def get_invoice_expenses(
    invoice_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the expenses booked against an invoice."""
    get_invoice_or_404(invoice_id, db)
    return list_invoice_expenses(invoice_id, db)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Create a new invoice."""
    invoice = Invoice(**invoice_data.model_dump())
    db.add(invoice)
    db.flush()

    log_activity(
        db, ACTION_CREATE, Invoice.__tablename__, invoice.id,
        record_details=invoice.inv_number,
        new_data=model_to_dict(invoice),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(invoice)
    return invoice


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: int,
    invoice_data: InvoiceUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Update invoice fields that were sent."""
    invoice = get_invoice_or_404(invoice_id, db)
    old_data = model_to_dict(invoice)

    for field, value in invoice_data.model_dump(exclude_unset=True).items():
        setattr(invoice, field, value)
    db.flush()

    log_activity(
        db, ACTION_UPDATE, Invoice.__tablename__, invoice.id,
        record_details=invoice.inv_number,
        old_data=old_data,
        new_data=model_to_dict(invoice),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(invoice)
    return invoice


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete an invoice with its discrepancies; its expenses are unlinked."""
    invoice = get_invoice_or_404(invoice_id, db)
    old_data = model_to_dict(invoice)

    for expense in invoice.expenses:
        expense.exp_invoice = None
    db.delete(invoice)

    log_activity(
        db, ACTION_DELETE, Invoice.__tablename__, invoice_id,
        record_details=old_data["inv_number"],
        old_data=old_data,
        actor=current_user.email,
        request=request
    )
    db.commit()
    return format_response(None, "Invoice deleted successfully")
