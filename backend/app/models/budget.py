"""
Budget breakdown model: estimated spending per category for a trip.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class BudgetLine(BaseModel):
    """One estimated cost category of a trip budget."""
    __tablename__ = "budget_breakdown"

    budget_id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.trip_id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    estimated_amount = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    trip = relationship("Trip", back_populates="budget_lines")

    __table_args__ = (
        CheckConstraint("estimated_amount >= 0", name="ck_budget_amount"),
    )
