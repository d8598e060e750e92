"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import date, datetime
from decimal import Decimal
import enum


def serialize_value(obj: Any) -> Any:
    """Convert dates, decimals and enums into JSON-safe values."""
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    return obj


def model_to_dict(instance: Any, exclude: Optional[set] = None) -> Dict[str, Any]:
    """Snapshot an ORM instance's column values as a JSON-safe dict."""
    exclude = exclude or set()
    data = {}
    for column in instance.__table__.columns:
        if column.name in exclude:
            continue
        data[column.name] = serialize_value(getattr(instance, column.name))
    return data


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
