"""
Pydantic schemas for the city and activity catalogs.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal


class ActivityResponse(BaseModel):
    """Schema for activity response."""
    activity_id: int
    activity_name: str
    city_id: Optional[int] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    estimated_cost: Optional[Decimal] = None
    duration_hours: Optional[Decimal] = None
    rating: Optional[Decimal] = None

    class Config:
        from_attributes = True


class CityResponse(BaseModel):
    """Schema for city response."""
    city_id: int
    city_name: str
    country: str
    region: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    cost_index: Optional[Decimal] = None
    popularity_score: int = 0

    class Config:
        from_attributes = True


class CityDetailResponse(CityResponse):
    """City with the activities it offers."""
    activities: List[ActivityResponse] = []
