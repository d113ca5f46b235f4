"""
Trip service: trip lifecycle plus the stop/activity/expense breakdown,
with ownership checks and consistency rules applied before any write.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from app.core.exceptions import (
    EntityNotFoundError, LocalOnlyOperationError, RemoteStoreError,
    TripAccessError, TripValidationError
)
from app.core.identity import Identity
from app.db.table_client import TableClient
from app.models.activity import ActivityCategory
from app.schemas.activity import ActivityCreate
from app.schemas.expense import ExpenseCreate
from app.schemas.stop import StopCreate
from app.schemas.trip import TripCreate, TripRecord, TripUpdate
from app.services.consistency import (
    activity_containment_warnings, budget_summary, build_duplicate, next_order_index,
    parse_budget, require_non_negative, require_positive, sort_activities, sort_stops,
    sort_trips, stop_containment_warnings, validate_date_range
)
from app.services.sync_service import TripSync, new_trip_ref, ref_for

logger = logging.getLogger(__name__)

ACTIVITY_CATEGORIES = {c.value for c in ActivityCategory}


class TripService:
    """Trip operations for one request, acting as a given identity."""

    def __init__(self, sync: TripSync, tables: TableClient):
        self.sync = sync
        self.tables = tables

    # Access

    async def get_trip(self, trip_id: str, probe_local: bool = True) -> TripRecord:
        trip = await self.sync.read_trip(trip_id, probe_local=probe_local)
        if trip is None:
            raise EntityNotFoundError("Trip", trip_id)
        return trip

    def require_owner(self, identity: Identity, trip: TripRecord) -> None:
        """Only the owner changes a trip; admins included."""
        if trip.owner_id != identity.id:
            raise TripAccessError("Access denied to this trip")

    def require_readable(self, identity: Identity, trip: TripRecord) -> None:
        if trip.owner_id == identity.id or trip.is_public or identity.is_admin:
            return
        raise TripAccessError("Access denied to this trip")

    async def _owned_remote_trip(self, identity: Identity, trip_id: str) -> TripRecord:
        trip = await self.get_trip(trip_id)
        self.require_owner(identity, trip)
        if ref_for(trip_id).is_local:
            raise LocalOnlyOperationError(
                "Locally saved trips are planned with itinerary sections, not stops"
            )
        return trip

    async def _safe_select(self, table: str, filters: Dict[str, Any], order=None) -> List[Any]:
        """Remote read that degrades to an empty result."""
        try:
            return await self.tables.select(table, filters, order=order)
        except RemoteStoreError as e:
            logger.warning(f"Reading {table} failed, showing none: {e}")
            return []

    # Trips

    async def create_trip(self, identity: Identity, data: TripCreate) -> TripRecord:
        """Validate, then write to the store the identity's new ids route to."""
        if not data.name or not data.name.strip():
            raise TripValidationError("Trip name is required")
        validate_date_range(data.start_date, data.end_date)
        budget = parse_budget(data.total_budget)

        ref = new_trip_ref(identity)
        record = TripRecord(
            id=ref.id,
            owner_id=identity.id,
            name=data.name.strip(),
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            cover_photo_url=data.cover_photo_url,
            is_public=False,
            total_budget=budget,
            city=data.city,
            country=data.country,
        )
        trip = await self.sync.write_trip(record, is_new=True)
        logger.info(f"Trip {trip.id} created in {ref.kind.value} store")
        return trip

    async def list_my_trips(self, identity: Identity) -> List[TripRecord]:
        """The identity's trips from both stores, latest start date first."""
        trips = await self.sync.list_trips({"owner_id": identity.id})
        return sort_trips(trips)

    async def update_trip(self, identity: Identity, trip_id: str, data: TripUpdate) -> TripRecord:
        trip = await self.get_trip(trip_id)
        self.require_owner(identity, trip)

        patch = data.model_dump(exclude_unset=True)
        if "total_budget" in patch:
            patch["total_budget"] = parse_budget(patch["total_budget"])
        if "name" in patch and not (patch["name"] or "").strip():
            raise TripValidationError("Trip name is required")
        updated = trip.model_copy(update=patch)
        validate_date_range(updated.start_date, updated.end_date)
        return await self.sync.write_trip(updated)

    async def set_visibility(self, identity: Identity, trip_id: str, is_public: Optional[bool] = None) -> TripRecord:
        """Flip (or set) is_public. Children inherit visibility through the trip."""
        trip = await self.get_trip(trip_id)
        self.require_owner(identity, trip)
        target = (not trip.is_public) if is_public is None else is_public
        return await self.sync.write_trip(trip.model_copy(update={"is_public": target}))

    async def duplicate_trip(self, identity: Identity, trip_id: str, start: Optional[date], end: Optional[date]) -> TripRecord:
        """Copy a public trip into the identity's trips with new dates."""
        validate_date_range(start, end)
        source = await self.sync.read_trip(trip_id, probe_local=True)
        if source is None or not source.is_public:
            raise EntityNotFoundError("Trip", trip_id)

        ref = new_trip_ref(identity)
        copied = build_duplicate(source.model_dump(), identity.id, ref.id, start, end)
        trip = await self.sync.write_trip(TripRecord.model_validate(copied), is_new=True)
        logger.info(f"Trip {trip_id} duplicated as {trip.id} for {identity.id}")
        return trip

    async def delete_trip(self, identity: Identity, trip_id: str) -> None:
        """
        Delete with cascade. Deleting an already-deleted trip is a no-op, but a
        remote store that cannot be reached is an error like any other write.
        """
        trip = await self.sync.read_trip(trip_id, probe_local=True, strict=True)
        if trip is None:
            return
        self.require_owner(identity, trip)
        await self.sync.delete_trip(trip_id)
        logger.info(f"Trip {trip_id} deleted")

    # Breakdown and totals

    async def breakdown(self, trip: TripRecord) -> Dict[str, Any]:
        """Ordered stops with their activities, expenses, and spend totals."""
        stops: List[Any] = []
        expenses: List[Any] = []
        activities_by_stop: Dict[str, List[Any]] = {}
        if not ref_for(trip.id).is_local:
            stops = sort_stops(await self._safe_select("stops", {"trip_id": trip.id}))
            if stops:
                activities = await self._safe_select("activities", {"stop_id": [s.id for s in stops]})
                for activity in activities:
                    activities_by_stop.setdefault(activity.stop_id, []).append(activity)
            expenses = await self._safe_select("expenses", {"trip_id": trip.id}, order="expense_date")

        all_activities = [a for items in activities_by_stop.values() for a in items]
        return {
            "trip": trip,
            "stops": [
                {"stop": stop, "activities": sort_activities(activities_by_stop.get(stop.id, []))}
                for stop in stops
            ],
            "expenses": expenses,
            "budget": budget_summary(trip.total_budget, all_activities, expenses),
            "total_days": (trip.end_date - trip.start_date).days + 1,
        }

    async def get_detail(self, identity: Identity, trip_id: str) -> Dict[str, Any]:
        trip = await self.get_trip(trip_id)
        self.require_readable(identity, trip)
        return await self.breakdown(trip)

    async def get_budget(self, identity: Identity, trip_id: str) -> Dict[str, Any]:
        detail = await self.get_detail(identity, trip_id)
        return detail["budget"]

    # Public trips

    async def list_public(self, query: Optional[str] = None, city: Optional[str] = None, country: Optional[str] = None) -> List[TripRecord]:
        """Public trips from both stores, newest first, with optional filters."""
        trips = await self.sync.list_trips({"is_public": True})
        if query:
            needle = query.lower()
            trips = [
                t for t in trips
                if needle in t.name.lower() or needle in (t.description or "").lower()
            ]
        if city:
            trips = [t for t in trips if (t.city or "").lower() == city.lower()]
        if country:
            trips = [t for t in trips if (t.country or "").lower() == country.lower()]
        return sort_trips(trips, field="created_at")

    async def get_public(self, trip_id: str) -> Dict[str, Any]:
        """A public trip by id; private or missing trips read as not found."""
        trip = await self.sync.read_trip(trip_id, probe_local=True)
        if trip is None or not trip.is_public:
            raise EntityNotFoundError("Trip", trip_id)
        return await self.breakdown(trip)

    async def authors_for(self, owner_ids: List[str]) -> Dict[str, Any]:
        """Profiles of trip owners that exist in the remote store."""
        remote_ids = [owner_id for owner_id in set(owner_ids) if not ref_for(owner_id).is_local]
        if not remote_ids:
            return {}
        profiles = await self._safe_select("profiles", {"id": remote_ids})
        return {profile.id: profile for profile in profiles}

    # Stops

    async def list_stops(self, identity: Identity, trip_id: str) -> List[Any]:
        trip = await self.get_trip(trip_id)
        self.require_readable(identity, trip)
        if ref_for(trip_id).is_local:
            return []
        return sort_stops(await self._safe_select("stops", {"trip_id": trip_id}))

    async def add_stop(self, identity: Identity, trip_id: str, data: StopCreate):
        """Append a stop; its order_index is the current stop count."""
        trip = await self._owned_remote_trip(identity, trip_id)
        warnings = stop_containment_warnings(trip, data.start_date, data.end_date)
        city = await self.tables.get("cities", data.city_id)
        if city is None:
            raise EntityNotFoundError("City", data.city_id)

        existing = await self.tables.count("stops", {"trip_id": trip_id})
        stop = await self.tables.insert("stops", {
            "trip_id": trip_id,
            "city_id": data.city_id,
            "order_index": next_order_index(existing),
            "start_date": data.start_date,
            "end_date": data.end_date,
            "notes": data.notes,
        })
        for warning in warnings:
            logger.warning(f"Stop {stop.id} on trip {trip_id}: {warning}")
        return stop, warnings

    async def _stop_of(self, trip_id: str, stop_id: str):
        stop = await self.tables.get("stops", stop_id)
        if stop is None or stop.trip_id != trip_id:
            return None
        return stop

    async def remove_stop(self, identity: Identity, trip_id: str, stop_id: str) -> None:
        """Delete a stop and its activities. Remaining stops keep their order_index."""
        await self._owned_remote_trip(identity, trip_id)
        stop = await self._stop_of(trip_id, stop_id)
        if stop is None:
            return
        await self.tables.delete("stops", stop_id)

    # Activities

    async def list_activities(self, identity: Identity, trip_id: str, stop_id: str) -> List[Any]:
        trip = await self.get_trip(trip_id)
        self.require_readable(identity, trip)
        if ref_for(trip_id).is_local:
            raise EntityNotFoundError("Stop", stop_id)
        stop = await self._stop_of(trip_id, stop_id)
        if stop is None:
            raise EntityNotFoundError("Stop", stop_id)
        return sort_activities(await self._safe_select("activities", {"stop_id": stop_id}))

    async def add_activity(self, identity: Identity, trip_id: str, stop_id: str, data: ActivityCreate):
        """
        Add an activity to a stop. A template supplies name, category, cost and
        duration unless the request overrides them.
        """
        await self._owned_remote_trip(identity, trip_id)
        stop = await self._stop_of(trip_id, stop_id)
        if stop is None:
            raise EntityNotFoundError("Stop", stop_id)

        template = None
        if data.activity_template_id:
            template = await self.tables.get("activity_templates", data.activity_template_id)
            if template is None:
                raise EntityNotFoundError("Activity template", data.activity_template_id)

        name = data.name or (template.name if template else None)
        if not name:
            raise TripValidationError("Activity name is required")
        category = data.category or (template.category if template else None)
        if not category:
            raise TripValidationError("Activity category is required")
        if template is None and category not in ACTIVITY_CATEGORIES:
            raise TripValidationError(f"Unknown activity category: {category}")

        if data.cost is not None:
            cost = data.cost
        else:
            cost = Decimal(str(template.estimated_cost)) if template else Decimal(0)
        require_non_negative(cost, "Cost")

        duration = data.duration_hours
        if duration is None and template is not None:
            duration = Decimal(str(template.duration_hours))
        if duration is None:
            raise TripValidationError("Duration is required")
        require_positive(duration, "Duration")

        warnings = activity_containment_warnings(stop, data.activity_date)
        same_day = await self.tables.count("activities", {"stop_id": stop_id, "activity_date": data.activity_date})
        activity = await self.tables.insert("activities", {
            "stop_id": stop_id,
            "activity_template_id": template.id if template else None,
            "name": name,
            "description": data.description or (template.description if template else None),
            "category": category,
            "cost": cost,
            "duration_hours": duration,
            "activity_date": data.activity_date,
            "activity_time": data.activity_time,
            "order_index": same_day,
        })
        for warning in warnings:
            logger.warning(f"Activity {activity.id} on stop {stop_id}: {warning}")
        return activity, warnings

    async def remove_activity(self, identity: Identity, trip_id: str, stop_id: str, activity_id: str) -> None:
        await self._owned_remote_trip(identity, trip_id)
        stop = await self._stop_of(trip_id, stop_id)
        if stop is None:
            return
        activity = await self.tables.get("activities", activity_id)
        if activity is None or activity.stop_id != stop_id:
            return
        await self.tables.delete("activities", activity_id)

    # Expenses

    async def list_expenses(self, identity: Identity, trip_id: str) -> List[Any]:
        trip = await self.get_trip(trip_id)
        self.require_readable(identity, trip)
        if ref_for(trip_id).is_local:
            return []
        return await self._safe_select("expenses", {"trip_id": trip_id}, order="expense_date")

    async def add_expense(self, identity: Identity, trip_id: str, data: ExpenseCreate):
        await self._owned_remote_trip(identity, trip_id)
        require_non_negative(data.amount, "Amount")
        if data.stop_id:
            stop = await self._stop_of(trip_id, data.stop_id)
            if stop is None:
                raise TripValidationError("Stop does not belong to this trip")
        return await self.tables.insert("expenses", {
            "trip_id": trip_id,
            "stop_id": data.stop_id,
            "category": data.category.value,
            "amount": data.amount,
            "description": data.description,
            "expense_date": data.expense_date,
        })

    async def remove_expense(self, identity: Identity, trip_id: str, expense_id: str) -> None:
        await self._owned_remote_trip(identity, trip_id)
        expense = await self.tables.get("expenses", expense_id)
        if expense is None or expense.trip_id != trip_id:
            return
        await self.tables.delete("expenses", expense_id)
