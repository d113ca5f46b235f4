"""
Pydantic schemas for reference data.
"""
from pydantic import BaseModel
from typing import Optional
from decimal import Decimal


class CityResponse(BaseModel):
    """Schema for city response."""
    id: str
    name: str
    country: str
    region: Optional[str] = None
    cost_index: Decimal
    popularity_score: int
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ActivityTemplateResponse(BaseModel):
    """Schema for suggested activity response."""
    id: str
    city_id: str
    name: str
    description: Optional[str] = None
    category: str
    estimated_cost: Decimal
    duration_hours: Decimal
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}
