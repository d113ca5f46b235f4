"""
Itinerary routes: flat section planning per trip.

The path segment "draft" addresses the current identity's itinerary for a
trip that has not been created yet.
"""
from datetime import date
from fastapi import APIRouter, Depends, status
from typing import Optional
from app.core.identity import Identity
from app.schemas.itinerary import (
    CommitResponse, SectionFieldEdit, SectionsReplace, SectionsResponse, TimelineResponse
)
from app.services.itinerary_service import ItineraryService
from app.api.dependencies import get_current_identity, get_itinerary_service

router = APIRouter(prefix="/itinerary", tags=["itinerary"])

DRAFT = "draft"


def _trip_key(trip_id: str) -> Optional[str]:
    return None if trip_id == DRAFT else trip_id


@router.get("/{trip_id}", response_model=SectionsResponse)
async def get_sections(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Sections including any edit still waiting to be saved."""
    return await service.get_sections(identity, _trip_key(trip_id))


@router.put("/{trip_id}", response_model=SectionsResponse)
async def replace_sections(
    trip_id: str,
    payload: SectionsReplace,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Replace the whole list and save it immediately."""
    sections = [s.model_dump(by_alias=True, mode="json") for s in payload.sections]
    await service.replace_sections(identity, _trip_key(trip_id), sections)
    return await service.get_sections(identity, _trip_key(trip_id))


@router.post("/{trip_id}/sections", response_model=SectionsResponse, status_code=status.HTTP_201_CREATED)
async def add_section(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Append a blank section."""
    await service.add_section(identity, _trip_key(trip_id))
    return await service.get_sections(identity, _trip_key(trip_id))


@router.patch("/{trip_id}/sections/{section_id}", response_model=SectionsResponse)
async def edit_section(
    trip_id: str,
    section_id: str,
    edit: SectionFieldEdit,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Edit one field; saved once edits pause for the auto-save delay."""
    await service.edit_section(identity, _trip_key(trip_id), section_id, edit.field, edit.value)
    return await service.get_sections(identity, _trip_key(trip_id))


@router.delete("/{trip_id}/sections/{section_id}", response_model=SectionsResponse)
async def remove_section(
    trip_id: str,
    section_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Remove a section; the last one stays."""
    await service.remove_section(identity, _trip_key(trip_id), section_id)
    return await service.get_sections(identity, _trip_key(trip_id))


@router.post("/{trip_id}/flush")
async def flush_sections(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Save a pending edit now."""
    written = await service.flush(identity, _trip_key(trip_id))
    return {"written": written}


@router.post("/{trip_id}/commit", response_model=CommitResponse)
async def commit_itinerary(
    trip_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Write the first section back onto the trip, creating it for a draft."""
    return await service.commit(identity, _trip_key(trip_id))


@router.get("/{trip_id}/timeline", response_model=TimelineResponse)
async def get_timeline(
    trip_id: str,
    q: Optional[str] = None,
    on: Optional[date] = None,
    identity: Identity = Depends(get_current_identity),
    service: ItineraryService = Depends(get_itinerary_service)
):
    """Sections by date with upcoming/active/completed status as of a day (default today)."""
    return await service.timeline(identity, _trip_key(trip_id), q, on)
