"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from app.models.expense import ExpenseCategory


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    stop_id: Optional[str] = None
    category: ExpenseCategory = ExpenseCategory.OTHER
    amount: Decimal
    description: Optional[str] = None
    expense_date: date


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: str
    trip_id: str
    stop_id: Optional[str] = None
    category: str
    amount: Decimal
    description: Optional[str] = None
    expense_date: date
    created_at: datetime

    model_config = {"from_attributes": True}
