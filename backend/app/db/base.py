"""
Declarative base and the shared model mixin.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from app.core.utils import new_remote_id, utcnow

Base = declarative_base()


class BaseModel(Base):
    """Abstract base with an opaque string id and audit timestamps."""
    __abstract__ = True

    id = Column(String(64), primary_key=True, default=new_remote_id)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
