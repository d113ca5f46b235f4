"""
Pydantic schemas for admin analytics.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class CityVisits(BaseModel):
    city_id: str
    name: str
    country: str
    visits: int
    percentage: float


class CategoryCount(BaseModel):
    category: str
    count: int
    percentage: float


class AnalyticsResponse(BaseModel):
    """Aggregate, read-only view across all users."""
    profiles: int
    remote_trips: int
    local_trips: int
    public_trips: int
    stops: int
    activities: int
    total_budget: Decimal
    total_spent: Decimal
    popular_cities: List[CityVisits] = []
    activity_categories: List[CategoryCount] = []
