"""
Pydantic schemas for Activity entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime, time as dt_time
from decimal import Decimal


class ActivityCreate(BaseModel):
    """
    Schema for adding an activity to a stop.
    Name, category, cost and duration default from the template when one is given.
    """
    activity_template_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[Decimal] = None
    duration_hours: Optional[Decimal] = None
    activity_date: date
    activity_time: Optional[dt_time] = None


class ActivityResponse(BaseModel):
    """Schema for activity response."""
    id: str
    stop_id: str
    activity_template_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    category: str
    cost: Decimal
    duration_hours: Decimal
    activity_date: date
    activity_time: Optional[dt_time] = None
    order_index: int
    created_at: datetime
    warnings: List[str] = []

    model_config = {"from_attributes": True}
