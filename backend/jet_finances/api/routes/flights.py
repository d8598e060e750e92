"""
Flight management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.models.flight import Flight
from jet_finances.schemas.flight import FlightCreate, FlightUpdate, FlightResponse
from jet_finances.api.dependencies import get_current_user, require_superadmin
from jet_finances.core.utils import format_response, model_to_dict
from jet_finances.services.activity_service import log_activity, ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])


def get_flight_or_404(flight_id: int, db: Session) -> Flight:
    flight = db.query(Flight).filter(Flight.id == flight_id).first()
    if not flight:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flight not found"
        )
    return flight


@router.get("", response_model=List[FlightResponse])
async def list_flights(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all flights, newest first."""
    return db.query(Flight).order_by(Flight.flt_date.desc(), Flight.id.desc()).all()


@router.get("/{flight_id}", response_model=FlightResponse)
async def get_flight(
    flight_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get flight by ID."""
    return get_flight_or_404(flight_id, db)


@router.post("", response_model=FlightResponse, status_code=status.HTTP_201_CREATED)
async def create_flight(
    flight_data: FlightCreate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Create a new flight."""
    flight = Flight(**flight_data.model_dump())
    db.add(flight)
    db.flush()

    log_activity(
        db, ACTION_CREATE, Flight.__tablename__, flight.id,
        record_details=flight.flt_number,
        new_data=model_to_dict(flight),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(flight)
    return flight


@router.put("/{flight_id}", response_model=FlightResponse)
async def update_flight(
    flight_id: int,
    flight_data: FlightUpdate,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Update flight fields that were sent."""
    flight = get_flight_or_404(flight_id, db)
    old_data = model_to_dict(flight)

    for field, value in flight_data.model_dump(exclude_unset=True).items():
        setattr(flight, field, value)
    db.flush()

    log_activity(
        db, ACTION_UPDATE, Flight.__tablename__, flight.id,
        record_details=flight.flt_number,
        old_data=old_data,
        new_data=model_to_dict(flight),
        actor=current_user.email,
        request=request
    )
    db.commit()
    db.refresh(flight)
    return flight


@router.delete("/{flight_id}")
async def delete_flight(
    flight_id: int,
    request: Request,
    current_user: User = Depends(require_superadmin),
    db: Session = Depends(get_db)
):
    """Delete a flight; linked expenses are kept and unlinked."""
    flight = get_flight_or_404(flight_id, db)
    old_data = model_to_dict(flight)

    for expense in flight.expenses:
        expense.exp_flight = None
    db.delete(flight)

    log_activity(
        db, ACTION_DELETE, Flight.__tablename__, flight_id,
        record_details=old_data["flt_number"],
        old_data=old_data,
        actor=current_user.email,
        request=request
    )
    db.commit()
    return format_response(None, "Flight deleted successfully")
