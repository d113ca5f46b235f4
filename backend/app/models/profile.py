"""
Profile model: one per registered user identity.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Profile(BaseModel):
    """User profile with login credentials."""
    __tablename__ = "profiles"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    language = Column(String(10), nullable=False, default="en")
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
