"""
Itinerary section service: the flat planning view of a trip, kept in the
local store and auto-saved through a debounced writer.
"""
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple
from app.core.config import settings
from app.core.exceptions import EntityNotFoundError, TripAccessError, TripValidationError
from app.core.identity import Identity
from app.schemas.itinerary import SectionType
from app.schemas.trip import TripRecord
from app.services.autosave import DebouncedWriter
from app.services.consistency import blank_section, default_section, parse_budget, validate_date_range
from app.services.local_store import LocalStore
from app.services.sync_service import TripSync, new_trip_ref, ref_for

logger = logging.getLogger(__name__)


def draft_key(identity: Identity) -> str:
    """Reserved sections key for an identity's not-yet-created trip."""
    if identity.is_anonymous:
        return settings.DRAFT_ITINERARY_KEY
    return f"{settings.DRAFT_ITINERARY_KEY}:{identity.id}"


def parse_section_date(value: str, field: str) -> Optional[date]:
    """Section dates are ISO strings; blank means unset."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise TripValidationError(f"{field} is not a valid date: {value}")


def _section_amount(value: str) -> Decimal:
    try:
        return Decimal(value) if value else Decimal(0)
    except (InvalidOperation, ValueError):
        return Decimal(0)


def section_status(section: Dict[str, Any], today: date) -> str:
    """upcoming / active / completed relative to today; undated sections are upcoming."""
    try:
        start = parse_section_date(section.get("startDate", ""), "startDate")
        end = parse_section_date(section.get("endDate", ""), "endDate")
    except TripValidationError:
        return "upcoming"
    if start is None or end is None or today < start:
        return "upcoming"
    if today > end:
        return "completed"
    return "active"


def sort_sections(sections: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """By start date; sections without a parseable start date go last."""
    def key(section):
        try:
            start = parse_section_date(section.get("startDate", ""), "startDate")
        except TripValidationError:
            start = None
        return (start is None, start or date.min)
    return sorted(sections, key=key)


class ItineraryService:
    """Read, edit, auto-save and commit itinerary sections."""

    def __init__(self, sync: TripSync, local: LocalStore, writer: DebouncedWriter):
        self.sync = sync
        self.local = local
        self.writer = writer

    async def _load_trip(self, identity: Identity, trip_id: str, write: bool) -> TripRecord:
        trip = await self.sync.read_trip(trip_id, probe_local=True)
        if trip is None:
            raise EntityNotFoundError("Trip", trip_id)
        if trip.owner_id != identity.id and (write or not trip.is_public):
            raise TripAccessError("Access denied to this trip")
        return trip

    async def _key_for(self, identity: Identity, trip_id: Optional[str], write: bool) -> Tuple[str, Optional[TripRecord]]:
        if trip_id is None:
            return draft_key(identity), None
        return trip_id, await self._load_trip(identity, trip_id, write)

    def _current(self, key: str, trip: Optional[TripRecord]) -> Tuple[List[Dict[str, Any]], bool]:
        """Pending edit first, then the stored list, else a synthesized one."""
        pending = self.writer.pending(key)
        if pending is not None:
            return pending, self.local.get_sections(key) is not None
        stored = self.local.get_sections(key)
        if stored:
            return stored, True
        if trip is None:
            return [blank_section(key)], False
        return [default_section(trip)], False

    def _save_now(self, key: str, sections: List[Dict[str, Any]]) -> None:
        self.writer.discard(key)
        self.local.save_sections(key, sections)

    async def get_sections(self, identity: Identity, trip_id: Optional[str] = None) -> Dict[str, Any]:
        key, trip = await self._key_for(identity, trip_id, write=False)
        sections, persisted = self._current(key, trip)
        return {
            "trip_id": key,
            "sections": sections,
            "persisted": persisted,
            "pending": self.writer.has_pending(key),
        }

    async def replace_sections(self, identity: Identity, trip_id: Optional[str], sections: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Whole-list replace, written immediately."""
        key, _ = await self._key_for(identity, trip_id, write=True)
        self._save_now(key, sections)
        return sections

    async def add_section(self, identity: Identity, trip_id: Optional[str]) -> List[Dict[str, Any]]:
        key, trip = await self._key_for(identity, trip_id, write=True)
        sections, _ = self._current(key, trip)
        sections = sections + [blank_section()]
        self._save_now(key, sections)
        return sections

    async def remove_section(self, identity: Identity, trip_id: Optional[str], section_id: str) -> List[Dict[str, Any]]:
        """Remove one section; the last remaining section cannot be removed."""
        key, trip = await self._key_for(identity, trip_id, write=True)
        sections, _ = self._current(key, trip)
        if not any(s.get("id") == section_id for s in sections):
            raise EntityNotFoundError("Section", section_id)
        if len(sections) <= 1:
            raise TripValidationError("An itinerary needs at least one section")
        sections = [s for s in sections if s.get("id") != section_id]
        self._save_now(key, sections)
        return sections

    async def edit_section(self, identity: Identity, trip_id: Optional[str], section_id: str, field: str, value: str) -> List[Dict[str, Any]]:
        """
        Change one field of one section. The write is debounced: edits inside
        the window build on each other and only the last state is saved.
        """
        key, trip = await self._key_for(identity, trip_id, write=True)
        if field == "type" and value not in {t.value for t in SectionType}:
            raise TripValidationError(f"Unknown section type: {value}")
        sections, _ = self._current(key, trip)
        updated = []
        found = False
        for section in sections:
            if section.get("id") == section_id:
                section = dict(section, **{field: value})
                found = True
            updated.append(section)
        if not found:
            raise EntityNotFoundError("Section", section_id)
        self.writer.schedule(key, updated)
        return updated

    async def flush(self, identity: Identity, trip_id: Optional[str]) -> bool:
        """Write any pending edit now."""
        key, _ = await self._key_for(identity, trip_id, write=True)
        return self.writer.flush(key)

    async def commit(self, identity: Identity, trip_id: Optional[str]) -> Dict[str, Any]:
        """
        Save the itinerary onto its trip: the first section's title,
        description, dates and budget replace the trip's. A draft becomes a
        new trip and its sections move under the new id.
        """
        key, trip = await self._key_for(identity, trip_id, write=True)
        self.writer.flush(key)
        sections, _ = self._current(key, trip)
        first = sections[0] if sections else {}

        start = parse_section_date(first.get("startDate", ""), "startDate")
        end = parse_section_date(first.get("endDate", ""), "endDate")
        budget = first.get("budget", "")

        if trip is not None:
            updated = trip.model_copy(update={
                "name": first.get("title") or trip.name,
                "description": first.get("description") or trip.description,
                "start_date": start or trip.start_date,
                "end_date": end or trip.end_date,
                "total_budget": parse_budget(budget) if budget else trip.total_budget,
            })
            validate_date_range(updated.start_date, updated.end_date)
            saved = await self.sync.write_trip(updated)
            self.local.save_sections(key, sections)
            return {"trip_id": saved.id, "store": ref_for(saved.id).kind.value, "created": False}

        today = date.today()
        ref = new_trip_ref(identity)
        record = TripRecord(
            id=ref.id,
            owner_id=identity.id,
            name=first.get("title") or "New Trip",
            description=first.get("description") or None,
            start_date=start or today,
            end_date=end or today,
            total_budget=parse_budget(budget),
            is_public=False,
        )
        validate_date_range(record.start_date, record.end_date)
        saved = await self.sync.write_trip(record, is_new=True)
        self.local.save_sections(saved.id, sections)
        self.local.delete_sections(key)
        logger.info(f"Draft itinerary saved as trip {saved.id}")
        return {"trip_id": saved.id, "store": ref.kind.value, "created": True}

    async def timeline(self, identity: Identity, trip_id: Optional[str], query: Optional[str] = None, today: Optional[date] = None) -> Dict[str, Any]:
        """Sections by start date with status, optionally filtered by text."""
        key, trip = await self._key_for(identity, trip_id, write=False)
        sections, _ = self._current(key, trip)
        today = today or date.today()

        ordered = sort_sections(sections)
        if query:
            needle = query.lower()
            ordered = [
                s for s in ordered
                if needle in (s.get("title") or "").lower()
                or needle in (s.get("description") or "").lower()
                or needle in (s.get("type") or "").lower()
            ]
        items = [dict(s, status=section_status(s, today)) for s in ordered]
        active = next((s["id"] for s in items if s["status"] == "active"), None)
        total = sum((_section_amount(s.get("budget", "")) for s in sections), Decimal(0))
        return {
            "trip_id": key,
            "sections": items,
            "total_budget": float(total),
            "active_section_id": active,
        }