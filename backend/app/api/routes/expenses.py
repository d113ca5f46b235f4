"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, status
from typing import List
from app.core.identity import Identity
from app.schemas.expense import ExpenseCreate, ExpenseResponse
from app.services.trip_service import TripService
from app.api.dependencies import get_current_identity, get_trip_service

router = APIRouter(prefix="/trips/{trip_id}/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Expenses of a trip by date."""
    expenses = await service.list_expenses(identity, trip_id)
    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Record an expense, optionally against one of the trip's stops."""
    expense = await service.add_expense(identity, trip_id, expense_data)
    return ExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_expense(
    trip_id: str,
    expense_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Delete an expense."""
    await service.remove_expense(identity, trip_id, expense_id)
    return None
