"""
Report routes: expenses-by-month spreadsheet export and its JSON preview.
"""
import logging
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from jet_finances.db.session import get_db
from jet_finances.models.user import User
from jet_finances.schemas.report import ReportDataResponse
from jet_finances.api.dependencies import get_current_user
from jet_finances.core.exceptions import NoDataForPeriod, UpstreamFetchFailure
from jet_finances.services.category_service import get_available_categories
from jet_finances.services.report_service import YEAR_FILTERS, ReportMatrix, build_report, load_report_records
from jet_finances.services.export_service import XLSX_MEDIA_TYPE, render_report, report_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def build_expenses_matrix(
    db: Session,
    year: str,
    show_subcategories: bool,
    report_for_ats: bool,
    today: date
) -> ReportMatrix:
    """Load expenses and aggregate them, mapping failures to HTTP errors."""
    if year not in YEAR_FILTERS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid year filter. Must be one of: {', '.join(YEAR_FILTERS)}"
        )

    try:
        records = load_report_records(db)
        return build_report(
            records,
            year_filter=year,
            show_subcategories=show_subcategories,
            apply_ats_filter=report_for_ats,
            today=today
        )
    except NoDataForPeriod:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data available for the selected period"
        )
    except UpstreamFetchFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch expenses"
        )


@router.get("/categories", response_model=List[str])
async def list_report_categories(current_user: User = Depends(get_current_user)):
    """Get the report categories in display order."""
    return get_available_categories()


@router.get("/expenses-by-month")
async def export_expenses_by_month(
    year: str = Query("current"),
    show_subcategories: bool = Query(False, alias="showSubcategories"),
    report_for_ats: bool = Query(False, alias="reportForATS"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Download the expenses-by-month report as an Excel workbook."""
    today = date.today()
    matrix = build_expenses_matrix(db, year, show_subcategories, report_for_ats, today)
    content = render_report(matrix)
    filename = report_filename(year, ats=report_for_ats, today=today)
    logger.info(f"{current_user.email} exported {filename}")

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/expenses-by-month/data", response_model=ReportDataResponse)
async def expenses_by_month_data(
    year: str = Query("current"),
    show_subcategories: bool = Query(False, alias="showSubcategories"),
    report_for_ats: bool = Query(False, alias="reportForATS"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the expenses-by-month matrix as JSON for on-screen preview."""
    matrix = build_expenses_matrix(db, year, show_subcategories, report_for_ats, date.today())
    return matrix.to_dict()
