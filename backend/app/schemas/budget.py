"""
Pydantic schemas for budget breakdown lines.
"""
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal


class BudgetLineCreate(BaseModel):
    """Schema for adding a budget line to a trip."""
    category: str
    estimated_amount: Decimal


class BudgetLineResponse(BudgetLineCreate):
    """Schema for budget line response."""
    budget_id: int
    trip_id: int
    created_at: datetime

    class Config:
        from_attributes = True
