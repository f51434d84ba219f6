"""
User model for authentication and trip ownership.
"""
from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """User account. Email is the login identity."""
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
