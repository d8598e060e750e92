"""
Discrepancy routes for objections raised against invoices.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.invoice import Invoice
from jet_finances.models.discrepancy import Discrepancy, DiscrepancyStatus
from jet_finances.schemas.discrepancy import DiscrepancyCreate, DiscrepancyUpdate, DiscrepancyResponse
from jet_finances.api.dependencies import get_current_user, require_superadmin
from jet_finances.core.utils import format_response, model_to_dict
from jet_finances.services.activity_service import log_activity, ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/discrepancies", tags=["discrepancies"])


def get_discrepancy_or_404(discrepancy_id: int, db: Session) -> Discrepancy:
    discrepancy = db.query(Discrepancy).filter(Discrepancy.id == discrepancy_id).first()
    if not discrepancy:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Discrepancy not found"
        )
    return discrepancy


@router.get("", response_model=List[DiscrepancyResponse])
async def list_discrepancies(
    invoice_id: Optional[int] = None,
    status_filter: Optional[DiscrepancyStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get discrepancies, newest first, optionally for one invoice or status."""
    query = db.query(Discrepancy)
    if invoice_id is not None:
        query = query.filter(Discrepancy.invoice_id == invoice_id)
    if status_filter is not None:
        query = query.filter(Discrepancy.status == status_filter)
    return query.order_by(Discrepancy.id.desc()).all()


@router.get("/{discrepancy_id}", response_model=DiscrepancyResponse)
async def get_discrepancy(
    discrepancy_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get discrepancy by ID."""
    return get_discrepancy_or_404(discrepancy_id, db)


@router.post("", response_model=DiscrepancyResponse, status_code=status.HTTP_201_CREATED)
async def create_discrepancy(
    discrepancy_data: DiscrepancyCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Raise a discrepancy against an invoice."""
    invoice = db.query(Invoice).filter(Invoice.id == discrepancy_data.invoice_id).first()
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found"
        )

    discrepancy = Discrepancy(**discrepancy_data.model_dump())
    db.add(discrepancy)
    db.flush()

    log_activity(
        db, ACTION_CREATE, Discrepancy.__tablename__, discrepancy.id,
        record_details=invoice.inv_number,
        new_data=model_to_dict(discrepancy),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(discrepancy)
    return discrepancy


@router.put("/{discrepancy_id}", response_model=DiscrepancyResponse)
async def update_discrepancy(
    discrepancy_id: int,
    discrepancy_data: DiscrepancyUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Update a discrepancy, e.g. move it through its statuses."""
    discrepancy = get_discrepancy_or_404(discrepancy_id, db)
    old_data = model_to_dict(discrepancy)

    for field, value in discrepancy_data.model_dump(exclude_unset=True).items():
        setattr(discrepancy, field, value)
    db.flush()

    log_activity(
        db, ACTION_UPDATE, Discrepancy.__tablename__, discrepancy.id,
        record_details=discrepancy.invoice.inv_number,
        old_data=old_data,
        new_data=model_to_dict(discrepancy),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(discrepancy)
    return discrepancy


@router.delete("/{discrepancy_id}")
async def delete_discrepancy(
    discrepancy_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete a discrepancy."""
    discrepancy = get_discrepancy_or_404(discrepancy_id, db)
    old_data = model_to_dict(discrepancy)
    details = discrepancy.invoice.inv_number
    db.delete(discrepancy)

    log_activity(
        db, ACTION_DELETE, Discrepancy.__tablename__, discrepancy_id,
        record_details=details,
        old_data=old_data,
        actor=current_user.email,
        request=request
    )
    db.commit()
    return format_response(None, "Discrepancy deleted successfully")
