"""
Stop model: a city visit within a trip.
"""
from sqlalchemy import Column, String, Date, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Stop(BaseModel):
    """Ordered city visit; order_index is a sort key, not an array position."""
    __tablename__ = "stops"

    trip_id = Column(String(64), ForeignKey("trips.id"), nullable=False, index=True)
    city_id = Column(String(64), ForeignKey("cities.id"), nullable=False, index=True)
    order_index = Column(Integer, nullable=False, default=0)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="stops")
    city = relationship("City")
    activities = relationship("Activity", back_populates="stop", cascade="all, delete-orphan")
