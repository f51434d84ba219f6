"""
Pydantic schemas for the trip aggregate: trips, stops and scheduled activities.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime, time
from decimal import Decimal
from app.schemas.budget import BudgetLineResponse


class TripCreate(BaseModel):
    """Schema for trip creation."""
    trip_name: str
    start_date: date
    end_date: date
    description: Optional[str] = None
    cover_photo: Optional[str] = None


class TripUpdate(BaseModel):
    """
    Schema for partial trip update.

    Only fields present in the request are applied, so an explicit
    `is_public: false` is an update while an omitted field is not.
    """
    trip_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    cover_photo: Optional[str] = None
    is_public: Optional[bool] = None


class TripResponse(BaseModel):
    """Schema for trip response."""
    trip_id: int
    user_id: int
    trip_name: str
    start_date: date
    end_date: date
    description: Optional[str] = None
    cover_photo: Optional[str] = None
    is_public: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripSummaryResponse(TripResponse):
    """Trip as listed on the user's dashboard."""
    stop_count: int = 0
    total_budget: Decimal = Decimal(0)


class StopCreate(BaseModel):
    """Schema for adding a stop to a trip."""
    city_id: int
    arrival_date: date
    departure_date: date
    stop_order: int
    accommodation_cost: Optional[Decimal] = None
    transport_cost: Optional[Decimal] = None


class StopResponse(BaseModel):
    """Schema for stop response."""
    stop_id: int
    trip_id: int
    city_id: int
    arrival_date: date
    departure_date: date
    stop_order: int
    accommodation_cost: Decimal
    transport_cost: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class ScheduledActivityCreate(BaseModel):
    """Schema for scheduling a catalog activity at a stop."""
    activity_id: int
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    actual_cost: Optional[Decimal] = None


class ScheduledActivityResponse(BaseModel):
    """Schema for scheduled activity response."""
    trip_activity_id: int
    stop_id: int
    activity_id: int
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    actual_cost: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class ScheduledActivityDetailResponse(ScheduledActivityResponse):
    """Scheduled activity with its catalog display fields."""
    activity_name: str
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class StopDetailResponse(StopResponse):
    """Stop with its city display fields and scheduled activities."""
    city_name: str
    country: str
    image_url: Optional[str] = None
    activities: List[ScheduledActivityDetailResponse] = []


class TripDetailResponse(TripResponse):
    """Full read view of a trip: ordered stops plus the budget breakdown."""
    stops: List[StopDetailResponse] = []
    budget_breakdown: List[BudgetLineResponse] = []
