"""
Trip aggregate models: the trip root, its ordered stops and their scheduled activities.
"""
from sqlalchemy import (
    Column, String, Date, Time, Boolean, Numeric, Text, ForeignKey, Integer, CheckConstraint
)
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Trip(BaseModel):
    """Trip itinerary owned by a single user."""
    __tablename__ = "trips"

    trip_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    trip_name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    cover_photo = Column(String(500), nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="trips")
    stops = relationship(
        "TripStop",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by=lambda: (TripStop.stop_order, TripStop.stop_id)
    )
    budget_lines = relationship("BudgetLine", back_populates="trip", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_trip_dates"),
    )


class TripStop(BaseModel):
    """A city visited during a trip. `stop_order` sequences stops within the trip."""
    __tablename__ = "trip_stops"

    stop_id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.trip_id", ondelete="CASCADE"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("cities.city_id"), nullable=False, index=True)
    arrival_date = Column(Date, nullable=False)
    departure_date = Column(Date, nullable=False)
    stop_order = Column(Integer, nullable=False)
    accommodation_cost = Column(Numeric(10, 2), nullable=False, default=0)
    transport_cost = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    trip = relationship("Trip", back_populates="stops")
    city = relationship("City")
    activities = relationship("TripActivity", back_populates="stop", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("arrival_date <= departure_date", name="ck_stop_dates"),
        CheckConstraint("accommodation_cost >= 0", name="ck_stop_accommodation_cost"),
        CheckConstraint("transport_cost >= 0", name="ck_stop_transport_cost"),
    )


class TripActivity(BaseModel):
    """A catalog activity scheduled at a stop."""
    __tablename__ = "trip_activities"

    trip_activity_id = Column(Integer, primary_key=True, index=True)
    stop_id = Column(Integer, ForeignKey("trip_stops.stop_id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.activity_id"), nullable=False, index=True)
    scheduled_date = Column(Date, nullable=True)
    scheduled_time = Column(Time, nullable=True)
    actual_cost = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    stop = relationship("TripStop", back_populates="activities")
    activity = relationship("Activity")

    __table_args__ = (
        CheckConstraint("actual_cost >= 0", name="ck_trip_activity_cost"),
    )
