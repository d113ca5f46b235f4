"""
Reference data: cities and their suggested activities.
"""
from sqlalchemy import Column, String, Numeric, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class City(BaseModel):
    """City that a stop can visit."""
    __tablename__ = "cities"

    name = Column(String(120), nullable=False, index=True)
    country = Column(String(120), nullable=False)
    region = Column(String(120), nullable=True)
    cost_index = Column(Numeric(6, 2), nullable=False, default=0)
    popularity_score = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    # Relationships
    activity_templates = relationship("ActivityTemplate", back_populates="city", cascade="all, delete-orphan")


class ActivityTemplate(BaseModel):
    """Suggested activity for a city with estimated cost and duration."""
    __tablename__ = "activity_templates"

    city_id = Column(String(64), ForeignKey("cities.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False)
    estimated_cost = Column(Numeric(15, 2), nullable=False, default=0)
    duration_hours = Column(Numeric(6, 2), nullable=False, default=1)
    image_url = Column(String(500), nullable=True)

    # Relationships
    city = relationship("City", back_populates="activity_templates")
