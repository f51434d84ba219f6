"""
City catalog model. Read-only reference data for trip stops.
"""
from sqlalchemy import Column, String, Numeric, Text, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class City(BaseModel):
    """Destination city."""
    __tablename__ = "cities"

    city_id = Column(Integer, primary_key=True, index=True)
    city_name = Column(String(255), nullable=False, index=True)
    country = Column(String(255), nullable=False, index=True)
    region = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    cost_index = Column(Numeric(10, 2), nullable=True)
    popularity_score = Column(Integer, default=0, nullable=False)

    # Relationships
    activities = relationship("Activity", back_populates="city")
