"""
Consistency rules over Trip -> Stops -> Activities, applied at write time
regardless of which store ends up holding the data.
"""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional
from app.core.exceptions import TripValidationError
from app.core.utils import new_remote_id

ZERO = Decimal(0)


def validate_date_range(start: Optional[date], end: Optional[date]) -> None:
    """Both dates are required and end must not precede start."""
    if start is None or end is None:
        raise TripValidationError("Please select both start and end dates")
    if end < start:
        raise TripValidationError("End date must be after start date")


def parse_budget(value: Any) -> Decimal:
    """
    Budget as a non-negative decimal.
    Absent or unparseable values become 0; negative values are rejected.
    """
    if value is None or value == "":
        return ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    if amount < 0:
        raise TripValidationError("Budget cannot be negative")
    return amount


def require_non_negative(value: Decimal, field: str) -> Decimal:
    if value < 0:
        raise TripValidationError(f"{field} cannot be negative")
    return value


def require_positive(value: Decimal, field: str) -> Decimal:
    if value <= 0:
        raise TripValidationError(f"{field} must be greater than zero")
    return value


def next_order_index(existing_count: int) -> int:
    """
    order_index for an appended stop: the number of stops already on the trip.
    Removing a stop never renumbers the rest, so indexes can repeat after a
    delete; ties sort by insertion time.
    """
    return existing_count


def sort_trips(trips: Iterable[Any], field: str = "start_date", descending: bool = True) -> List[Any]:
    """Trips ordered by a date field, newest first by default."""
    def key(trip):
        value = getattr(trip, field, None)
        if isinstance(value, datetime) and value.tzinfo is None:
            # SQLite hands back naive UTC timestamps
            value = value.replace(tzinfo=timezone.utc)
        return (value is not None, value)
    return sorted(trips, key=key, reverse=descending)


def sort_stops(stops: Iterable[Any]) -> List[Any]:
    """Stops by order_index ascending, ties broken by insertion order."""
    return sorted(stops, key=lambda s: (s.order_index, s.created_at))


def sort_activities(activities: Iterable[Any]) -> List[Any]:
    """Activities by (activity_date, order_index) ascending."""
    return sorted(activities, key=lambda a: (a.activity_date, a.order_index, a.created_at))


def _within(start: date, end: date, outer_start: date, outer_end: date) -> bool:
    return outer_start <= start and end <= outer_end


def stop_containment_warnings(trip, start: date, end: date) -> List[str]:
    """Advisory: a stop should fall within its trip's dates."""
    warnings = []
    if end < start:
        raise TripValidationError("Stop end date must not precede its start date")
    if not _within(start, end, trip.start_date, trip.end_date):
        warnings.append(
            f"Stop dates {start.isoformat()}..{end.isoformat()} fall outside the trip "
            f"({trip.start_date.isoformat()}..{trip.end_date.isoformat()})"
        )
    return warnings


def activity_containment_warnings(stop, activity_date: date) -> List[str]:
    """Advisory: an activity should fall within its stop's dates."""
    if not _within(activity_date, activity_date, stop.start_date, stop.end_date):
        return [
            f"Activity date {activity_date.isoformat()} falls outside the stop "
            f"({stop.start_date.isoformat()}..{stop.end_date.isoformat()})"
        ]
    return []


def budget_summary(total_budget: Any, activities: Iterable[Any], expenses: Iterable[Any]) -> Dict[str, Any]:
    """
    Spend totals for a trip.

    total_spent = sum of activity costs + sum of expense amounts
    remaining   = total_budget - total_spent (negative is a valid state)
    """
    budget = Decimal(str(total_budget)) if total_budget is not None else ZERO
    activities_cost = sum((Decimal(str(a.cost or 0)) for a in activities), ZERO)

    expenses_cost = ZERO
    by_category: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for expense in expenses:
        amount = Decimal(str(expense.amount or 0))
        expenses_cost += amount
        category = expense.category or "other"
        by_category[category] = by_category.get(category, ZERO) + amount
        counts[category] = counts.get(category, 0) + 1

    total_spent = activities_cost + expenses_cost
    categories = [
        {
            "category": category,
            "amount": amount,
            "expense_count": counts[category],
            "percentage_of_total": float(amount / total_spent * 100) if total_spent > 0 else 0.0,
        }
        for category, amount in by_category.items()
    ]
    categories.sort(key=lambda item: item["amount"], reverse=True)

    return {
        "total_budget": budget,
        "activities_cost": activities_cost,
        "expenses_cost": expenses_cost,
        "total_spent": total_spent,
        "remaining": budget - total_spent,
        "fill_ratio": float(total_spent / budget * 100) if budget > 0 else 0.0,
        "categories": categories,
    }


def build_duplicate(source: Dict[str, Any], owner_id: str, new_id: str, start: Optional[date], end: Optional[date]) -> Dict[str, Any]:
    """
    Copy of a public trip for another owner.
    Fresh id and owner, caller-supplied dates, always private.
    """
    validate_date_range(start, end)
    duplicate = {k: v for k, v in source.items() if k not in ("created_at", "updated_at")}
    duplicate.update(
        id=new_id,
        owner_id=owner_id,
        start_date=start,
        end_date=end,
        is_public=False,
    )
    return duplicate


def default_section(trip) -> Dict[str, Any]:
    """
    Single itinerary section synthesized from the trip itself, so the
    itinerary always has one editable unit. Not persisted until edited.
    """
    return {
        "id": synthesized_section_id(trip.id),
        "title": trip.name or "",
        "description": trip.description or "",
        "startDate": trip.start_date.isoformat() if trip.start_date else "",
        "endDate": trip.end_date.isoformat() if trip.end_date else "",
        "budget": str(trip.total_budget) if trip.total_budget else "",
        "type": "activity",
    }


def synthesized_section_id(key: str) -> str:
    """Stable id for a section that exists only until first saved."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"itinerary-section:{key}"))


def blank_section(key: Optional[str] = None) -> Dict[str, Any]:
    """Empty section; keyed ones get a stable id."""
    return {
        "id": synthesized_section_id(key) if key else new_remote_id(),
        "title": "",
        "description": "",
        "startDate": "",
        "endDate": "",
        "budget": "",
        "type": "activity",
    }
