"""
Explore routes: trips their owners have made public.
"""
from fastapi import APIRouter, Depends
from typing import List, Optional
from app.schemas.trip import PublicTripResponse, TripDetailResponse
from app.schemas.user import AuthorResponse
from app.services.trip_service import TripService
from app.api.dependencies import get_trip_service
from app.api.routes.trips import detail_response, trip_response

router = APIRouter(prefix="/public/trips", tags=["public"])


@router.get("", response_model=List[PublicTripResponse])
async def list_public_trips(
    q: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
    service: TripService = Depends(get_trip_service)
):
    """Public trips from every owner, newest first."""
    trips = await service.list_public(q, city, country)
    authors = await service.authors_for([trip.owner_id for trip in trips])

    results = []
    for trip in trips:
        author = authors.get(trip.owner_id)
        results.append(PublicTripResponse(
            **trip_response(trip).model_dump(),
            author=AuthorResponse.model_validate(author) if author else None,
        ))
    return results


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_public_trip(
    trip_id: str,
    service: TripService = Depends(get_trip_service)
):
    """A public trip with its stops and activities."""
    detail = await service.get_public(trip_id)
    return detail_response(detail)
