"""
Reference data routes: cities and suggested activities.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
from app.db.table_client import TableClient
from app.schemas.city import ActivityTemplateResponse, CityResponse
from app.api.dependencies import get_table_client

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=List[CityResponse])
async def list_cities(
    q: Optional[str] = None,
    tables: TableClient = Depends(get_table_client)
):
    """Cities by name, optionally filtered by name or country."""
    cities = await tables.select("cities", order="name")
    if q:
        needle = q.lower()
        cities = [c for c in cities if needle in c.name.lower() or needle in c.country.lower()]
    return cities


@router.get("/{city_id}", response_model=CityResponse)
async def get_city(city_id: str, tables: TableClient = Depends(get_table_client)):
    city = await tables.get("cities", city_id)
    if not city:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="City not found"
        )
    return city


@router.get("/{city_id}/activity-templates", response_model=List[ActivityTemplateResponse])
async def list_activity_templates(city_id: str, tables: TableClient = Depends(get_table_client)):
    """Suggested activities for a city, cheapest first."""
    city = await tables.get("cities", city_id)
    if not city:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="City not found"
        )
    return await tables.select("activity_templates", {"city_id": city_id}, order=["estimated_cost", "name"])
