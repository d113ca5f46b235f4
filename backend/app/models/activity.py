"""
Activity model: a scheduled, costed event within a stop.
"""
import enum
from sqlalchemy import Column, String, Date, Time, Numeric, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class ActivityCategory(str, enum.Enum):
    """Built-in activity categories; templates may carry free-text ones."""
    SIGHTSEEING = "sightseeing"
    FOOD = "food"
    ADVENTURE = "adventure"
    CULTURE = "culture"
    SHOPPING = "shopping"
    NIGHTLIFE = "nightlife"


class Activity(BaseModel):
    """Activity scheduled on a date within its stop."""
    __tablename__ = "activities"

    stop_id = Column(String(64), ForeignKey("stops.id"), nullable=False, index=True)
    activity_template_id = Column(String(64), ForeignKey("activity_templates.id"), nullable=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False)
    cost = Column(Numeric(15, 2), nullable=False, default=0)
    duration_hours = Column(Numeric(6, 2), nullable=False)
    activity_date = Column(Date, nullable=False, index=True)
    activity_time = Column(Time, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    stop = relationship("Stop", back_populates="activities")
