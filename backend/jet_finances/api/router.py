"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from jet_finances.api.routes import (
    auth, flights, invoices, expenses, dictionaries,
    discrepancies, activity_logs, dashboard, reports, health
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(flights.router)
api_router.include_router(invoices.router)
api_router.include_router(expenses.router)
api_router.include_router(dictionaries.router)
api_router.include_router(discrepancies.router)
api_router.include_router(activity_logs.router)
api_router.include_router(dashboard.router)
api_router.include_router(reports.router)
api_router.include_router(health.router)
