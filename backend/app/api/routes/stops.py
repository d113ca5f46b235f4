"""
Stop management routes: the ordered city visits of a trip.
"""
from fastapi import APIRouter, Depends, status
from typing import List
from app.core.identity import Identity
from app.schemas.stop import StopCreate, StopResponse
from app.services.trip_service import TripService
from app.api.dependencies import get_current_identity, get_trip_service
from app.api.routes.trips import stop_response

router = APIRouter(prefix="/trips/{trip_id}/stops", tags=["stops"])


@router.get("", response_model=List[StopResponse])
async def list_stops(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Stops in visiting order."""
    stops = await service.list_stops(identity, trip_id)
    return [stop_response(stop) for stop in stops]


@router.post("", response_model=StopResponse, status_code=status.HTTP_201_CREATED)
async def add_stop(
    trip_id: str,
    stop_data: StopCreate,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Append a stop. Dates outside the trip come back as warnings."""
    stop, warnings = await service.add_stop(identity, trip_id, stop_data)
    return stop_response(stop, warnings)


@router.delete("/{stop_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_stop(
    trip_id: str,
    stop_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TripService = Depends(get_trip_service)
):
    """Delete a stop and its activities."""
    await service.remove_stop(identity, trip_id, stop_id)
    return None
