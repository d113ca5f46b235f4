"""
Activity routes: scheduled events within a stop.
"""
from fastapi import APIRouter, Depends, status
from typing import List
from app.core.identity import Identity
from app.schemas.activity import ActivityCreate, ActivityResponse
from app.services.trip_service import TripService
from app.api.dependencies import get_current_identity, get_trip_service

router = APIRouter(prefix="/trips/{trip_id}/stops/{stop_id}/activities", tags=["activities"])


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    trip_id: str,
    stop_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Activities by date, then order within the day."""
    activities = await service.list_activities(identity, trip_id, stop_id)
    return [ActivityResponse.model_validate(a) for a in activities]


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def add_activity(
    trip_id: str,
    stop_id: str,
    activity_data: ActivityCreate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Add an activity, optionally from a city's activity template."""
    activity, warnings = await service.add_activity(identity, trip_id, stop_id, activity_data)
    response = ActivityResponse.model_validate(activity)
    response.warnings = warnings
    return response


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_activity(
    trip_id: str,
    stop_id: str,
    activity_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    await service.remove_activity(identity, trip_id, stop_id, activity_id)
    return None
