"""
Trip model: a user's itinerary with a date range and budget.
"""
from sqlalchemy import Column, String, Date, Boolean, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Trip(BaseModel):
    """Trip owned by exactly one profile, optionally public for duplication."""
    __tablename__ = "trips"

    owner_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    cover_photo_url = Column(String(500), nullable=True)
    is_public = Column(Boolean, default=False, nullable=False, index=True)
    total_budget = Column(Numeric(15, 2), nullable=False, default=0)
    city = Column(String(120), nullable=True)
    country = Column(String(120), nullable=True)

    # Relationships
    owner = relationship("Profile", back_populates="trips")
    stops = relationship("Stop", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
