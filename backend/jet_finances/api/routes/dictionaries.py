"""
Dictionary routes: expense types, expense subtypes and invoice types.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from typing import List
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.dictionary import ExpenseType, ExpenseSubtype, InvoiceType
from jet_finances.schemas.dictionary import (
    DictionaryItemUpdate,
    ExpenseTypeCreate, ExpenseTypeResponse,
    ExpenseSubtypeCreate, ExpenseSubtypeResponse,
    InvoiceTypeCreate, InvoiceTypeResponse,
)
from jet_finances.api.dependencies import get_current_user, require_superadmin
from jet_finances.core.utils import format_response, model_to_dict
from jet_finances.services.activity_service import log_activity, ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dictionaries", tags=["dictionaries"])


def get_or_404(model, record_id: int, name: str, db: Session):
    record = db.query(model).filter(model.id == record_id).first()
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{name} not found"
        )
    return record


def commit_or_conflict(db: Session, name: str) -> None:
    """Commit, turning unique-name violations into 400."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} with this name already exists"
        )


def create_item(model, data, name: str, request: Request, current_user: User, db: Session, **extra):
    record = model(**data.model_dump(), **extra)
    db.add(record)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} with this name already exists"
        )
    log_activity(
        db, ACTION_CREATE, model.__tablename__, record.id,
        record_details=record.name,
        new_data=model_to_dict(record),
        actor=current_user.email,
        request=request
    )
    commit_or_conflict(db, name)
    db.refresh(record)
    return record


def update_item(record, data: DictionaryItemUpdate, name: str, request: Request, current_user: User, db: Session):
    old_data = model_to_dict(record)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(record, field, value)
    log_activity(
        db, ACTION_UPDATE, record.__tablename__, record.id,
        record_details=record.name,
        old_data=old_data,
        new_data=model_to_dict(record),
        actor=current_user.email,
        request=request
    )
    commit_or_conflict(db, name)
    db.refresh(record)
    return record


def delete_item(record, name: str, request: Request, current_user: User, db: Session) -> dict:
    old_data = model_to_dict(record)
    db.delete(record)
    log_activity(
        db, ACTION_DELETE, record.__tablename__, old_data["id"],
        record_details=old_data["name"],
        old_data=old_data,
        actor=current_user.email,
        request=request
    )
    db.commit()
    return format_response(None, f"{name} deleted successfully")


# Expense types

@router.get("/expense-types", response_model=List[ExpenseTypeResponse])
async def list_expense_types(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get expense types with their subtypes, by name."""
    return db.query(ExpenseType).options(
        selectinload(ExpenseType.subtypes)
    ).order_by(ExpenseType.name).all()


@router.post("/expense-types", response_model=ExpenseTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_expense_type(
    data: ExpenseTypeCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Create an expense type."""
    return create_item(ExpenseType, data, "Expense type", request, current_user, db)


@router.put("/expense-types/{type_id}", response_model=ExpenseTypeResponse)
async def update_expense_type(
    type_id: int,
    data: DictionaryItemUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Rename or describe an expense type."""
    record = get_or_404(ExpenseType, type_id, "Expense type", db)
    return update_item(record, data, "Expense type", request, current_user, db)


@router.delete("/expense-types/{type_id}")
async def delete_expense_type(
    type_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete an expense type and its subtypes."""
    record = get_or_404(ExpenseType, type_id, "Expense type", db)
    return delete_item(record, "Expense type", request, current_user, db)


@router.get("/expense-types/{type_id}/subtypes", response_model=List[ExpenseSubtypeResponse])
async def list_expense_subtypes(
    type_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get subtypes of an expense type."""
    get_or_404(ExpenseType, type_id, "Expense type", db)
    return db.query(ExpenseSubtype).filter(
        ExpenseSubtype.expense_type_id == type_id
    ).order_by(ExpenseSubtype.name).all()


@router.post(
    "/expense-types/{type_id}/subtypes",
    response_model=ExpenseSubtypeResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_expense_subtype(
    type_id: int,
    data: ExpenseSubtypeCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Add a subtype to an expense type."""
    get_or_404(ExpenseType, type_id, "Expense type", db)
    return create_item(ExpenseSubtype, data, "Expense subtype", request, current_user, db, expense_type_id=type_id)


@router.delete("/expense-subtypes/{subtype_id}")
async def delete_expense_subtype(
    subtype_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete an expense subtype."""
    record = get_or_404(ExpenseSubtype, subtype_id, "Expense subtype", db)
    return delete_item(record, "Expense subtype", request, current_user, db)


# Invoice types

@router.get("/invoice-types", response_model=List[InvoiceTypeResponse])
async def list_invoice_types(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get invoice types by name."""
    return db.query(InvoiceType).order_by(InvoiceType.name).all()


@router.post("/invoice-types", response_model=InvoiceTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice_type(
    data: InvoiceTypeCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Create an invoice type."""
    return create_item(InvoiceType, data, "Invoice type", request, current_user, db)


@router.put("/invoice-types/{type_id}", response_model=InvoiceTypeResponse)
async def update_invoice_type(
    type_id: int,
    data: DictionaryItemUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Rename or describe an invoice type."""
    record = get_or_404(InvoiceType, type_id, "Invoice type", db)
    return update_item(record, data, "Invoice type", request, current_user, db)


@router.delete("/invoice-types/{type_id}")
async def delete_invoice_type(
    type_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete an invoice type; expenses using it keep no type."""
    record = get_or_404(InvoiceType, type_id, "Invoice type", db)
    return delete_item(record, "Invoice type", request, current_user, db)
