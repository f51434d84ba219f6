"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional, Union
from datetime import date, time
from app.core.exceptions import ValidationError


def parse_date(value: Union[date, str, None], field: str) -> Optional[date]:
    """Accept a date or an ISO-8601 date string."""
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO date", {"field": field, "value": value})


def parse_time(value: Union[time, str, None], field: str) -> Optional[time]:
    """Accept a time or an ISO-8601 time string (HH:MM[:SS])."""
    if value is None or isinstance(value, time):
        return value
    try:
        return time.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO time", {"field": field, "value": value})


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, error_code: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message, "error_code": error_code}
    if details:
        response["details"] = details
    return response
