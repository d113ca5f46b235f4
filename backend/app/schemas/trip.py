"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import List, Optional, Union
from datetime import date, datetime
from decimal import Decimal
from app.schemas.budget import BudgetSummary
from app.schemas.stop import StopDetailResponse
from app.schemas.expense import ExpenseResponse
from app.schemas.user import AuthorResponse


class TripRecord(BaseModel):
    """Trip as held by either store."""
    id: str
    owner_id: str
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    cover_photo_url: Optional[str] = None
    is_public: bool = False
    total_budget: Decimal = Decimal(0)
    city: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TripCreate(BaseModel):
    """Schema for trip creation. Budget may arrive as free text from a form."""
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_photo_url: Optional[str] = None
    total_budget: Optional[Union[Decimal, str]] = None
    city: Optional[str] = None
    country: Optional[str] = None


class TripUpdate(BaseModel):
    """Schema for trip update."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_photo_url: Optional[str] = None
    total_budget: Optional[Union[Decimal, str]] = None
    city: Optional[str] = None
    country: Optional[str] = None


class VisibilityUpdate(BaseModel):
    """Explicit visibility; omit to flip the current value."""
    is_public: Optional[bool] = None


class TripDuplicate(BaseModel):
    """New date range for a duplicated public trip."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TripResponse(TripRecord):
    """Schema for trip response."""
    store: str  # "remote" or "local"


class PublicTripResponse(TripResponse):
    """Public trip with its author when known."""
    author: Optional[AuthorResponse] = None


class TripDetailResponse(TripResponse):
    """Trip with ordered stops, expenses and spend totals."""
    stops: List[StopDetailResponse] = []
    expenses: List[ExpenseResponse] = []
    budget: BudgetSummary
    total_days: int
