"""
Activity catalog model. Read-only reference data for scheduled activities.
"""
from sqlalchemy import Column, String, Numeric, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Activity(BaseModel):
    """Something to do in a city."""
    __tablename__ = "activities"

    activity_id = Column(Integer, primary_key=True, index=True)
    activity_name = Column(String(255), nullable=False)
    city_id = Column(Integer, ForeignKey("cities.city_id"), nullable=True, index=True)
    category = Column(String(100), nullable=True, index=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    estimated_cost = Column(Numeric(10, 2), nullable=True)
    duration_hours = Column(Numeric(5, 2), nullable=True)
    rating = Column(Numeric(3, 2), nullable=True)

    # Relationships
    city = relationship("City", back_populates="activities")
