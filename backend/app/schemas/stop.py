"""
Pydantic schemas for Stop entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from app.schemas.activity import ActivityResponse


class StopCreate(BaseModel):
    """Schema for adding a stop to a trip."""
    city_id: str
    start_date: date
    end_date: date
    notes: Optional[str] = None


class StopResponse(BaseModel):
    """Schema for stop response."""
    id: str
    trip_id: str
    city_id: str
    city_name: Optional[str] = None
    country: Optional[str] = None
    order_index: int
    start_date: date
    end_date: date
    notes: Optional[str] = None
    created_at: datetime
    warnings: List[str] = []  # Advisory date-containment notes

    model_config = {"from_attributes": True}


class StopDetailResponse(StopResponse):
    """Stop with its activities in schedule order."""
    activities: List[ActivityResponse] = []
    activities_cost: float = 0.0
