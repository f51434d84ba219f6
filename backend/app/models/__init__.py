"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.city import City
from app.models.activity import Activity
from app.models.trip import Trip, TripStop, TripActivity
from app.models.budget import BudgetLine

__all__ = [
    "User",
    "City",
    "Activity",
    "Trip",
    "TripStop",
    "TripActivity",
    "BudgetLine",
]
