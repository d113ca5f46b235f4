"""
Pydantic schemas for itinerary sections.

Sections keep the camelCase keys they are stored under (startDate, endDate).
"""
import enum
from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class SectionType(str, enum.Enum):
    """Itinerary section types."""
    TRAVEL = "travel"
    HOTEL = "hotel"
    ACTIVITY = "activity"
    FOOD = "food"


class ItinerarySection(BaseModel):
    """Flat planning unit used when a trip has no stop/activity breakdown."""
    id: str
    title: str = ""
    description: str = ""
    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    budget: str = ""  # Decimal as entered
    type: SectionType = SectionType.ACTIVITY

    model_config = {"populate_by_name": True}


class SectionsReplace(BaseModel):
    """Whole-list replacement."""
    sections: List[ItinerarySection]


class SectionFieldEdit(BaseModel):
    """Single-field edit of one section; saved after the debounce delay."""
    field: Literal["title", "description", "startDate", "endDate", "budget", "type"]
    value: str


class SectionsResponse(BaseModel):
    """Sections for a trip id (or the draft key)."""
    trip_id: str
    sections: List[ItinerarySection]
    persisted: bool  # False when the list was synthesized and not yet saved
    pending: bool = False  # True while a debounced write is outstanding


class TimelineSection(ItinerarySection):
    """Section with its status relative to today."""
    status: Literal["upcoming", "active", "completed"]


class TimelineResponse(BaseModel):
    """Sections in date order with budget total."""
    trip_id: str
    sections: List[TimelineSection]
    total_budget: float
    active_section_id: Optional[str] = None


class CommitResponse(BaseModel):
    """Result of saving an itinerary back onto its trip."""
    trip_id: str
    store: str
    created: bool
