"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, status
from typing import Any, Dict, List
from app.core.identity import Identity
from app.schemas.activity import ActivityResponse
from app.schemas.budget import BudgetSummary
from app.schemas.expense import ExpenseResponse
from app.schemas.stop import StopDetailResponse, StopResponse
from app.schemas.trip import (
    TripCreate, TripDetailResponse, TripDuplicate, TripRecord,
    TripResponse, TripUpdate, VisibilityUpdate
)
from app.services.consistency import budget_summary
from app.services.sync_service import ref_for
from app.services.trip_service import TripService
from app.api.dependencies import get_current_identity, get_trip_service

router = APIRouter(prefix="/trips", tags=["trips"])


def trip_response(trip: TripRecord) -> TripResponse:
    """Trip with the store that holds it."""
    return TripResponse(**trip.model_dump(), store=ref_for(trip.id).kind.value)


def stop_response(stop, warnings: List[str] = None) -> StopResponse:
    return StopResponse(
        id=stop.id,
        trip_id=stop.trip_id,
        city_id=stop.city_id,
        city_name=stop.city.name if stop.city else None,
        country=stop.city.country if stop.city else None,
        order_index=stop.order_index,
        start_date=stop.start_date,
        end_date=stop.end_date,
        notes=stop.notes,
        created_at=stop.created_at,
        warnings=warnings or [],
    )


def detail_response(detail: Dict[str, Any]) -> TripDetailResponse:
    """Build the nested trip response from a TripService breakdown."""
    stops = []
    for item in detail["stops"]:
        activities = item["activities"]
        stops.append(StopDetailResponse(
            **stop_response(item["stop"]).model_dump(),
            activities=[ActivityResponse.model_validate(a) for a in activities],
            activities_cost=float(budget_summary(0, activities, [])["activities_cost"]),
        ))
    return TripDetailResponse(
        **trip_response(detail["trip"]).model_dump(),
        stops=stops,
        expenses=[ExpenseResponse.model_validate(e) for e in detail["expenses"]],
        budget=BudgetSummary(**detail["budget"]),
        total_days=detail["total_days"],
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Create a new trip."""
    trip = await service.create_trip(identity, trip_data)
    return trip_response(trip)


@router.get("", response_model=List[TripResponse])
async def list_trips(
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """List the current identity's trips, latest start date first."""
    trips = await service.list_my_trips(identity)
    return [trip_response(trip) for trip in trips]


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Get trip details with stops, activities, expenses and budget."""
    detail = await service.get_detail(identity, trip_id)
    return detail_response(detail)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: str,
    trip_data: TripUpdate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Update trip fields; dates are re-validated against the merged values."""
    trip = await service.update_trip(identity, trip_id, trip_data)
    return trip_response(trip)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Delete a trip with its stops, activities, expenses and sections."""
    await service.delete_trip(identity, trip_id)
    return None


@router.post("/{trip_id}/visibility", response_model=TripResponse)
async def toggle_visibility(
    trip_id: str,
    visibility: VisibilityUpdate = None,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Flip is_public, or set it when a value is given."""
    is_public = visibility.is_public if visibility else None
    trip = await service.set_visibility(identity, trip_id, is_public)
    return trip_response(trip)


@router.post("/{trip_id}/duplicate", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_trip(
    trip_id: str,
    dates: TripDuplicate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Copy a public trip into the current identity's trips."""
    trip = await service.duplicate_trip(identity, trip_id, dates.start_date, dates.end_date)
    return trip_response(trip)


@router.get("/{trip_id}/budget", response_model=BudgetSummary)
async def get_budget(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Budget summary: activity costs plus expenses against the trip budget."""
    summary = await service.get_budget(identity, trip_id)
    return BudgetSummary(**summary)
