"""
Admin analytics: aggregate, read-only counts across all users.
"""
import logging
from decimal import Decimal
from typing import Any, Dict
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import RemoteStoreError
from app.models import Activity, City, Expense, Profile, Stop, Trip
from app.services.local_store import LocalStore

logger = logging.getLogger(__name__)


def _percentages(counts, total: int):
    return [(key, count, float(count / total * 100) if total > 0 else 0.0) for key, count in counts]


def collect_analytics(db: Session, local: LocalStore, top: int = 6) -> Dict[str, Any]:
    """Counts and totals over both stores."""
    try:
        profiles = db.query(func.count(Profile.id)).scalar() or 0
        remote_trips = db.query(func.count(Trip.id)).scalar() or 0
        remote_public = db.query(func.count(Trip.id)).filter(Trip.is_public.is_(True)).scalar() or 0
        stops = db.query(func.count(Stop.id)).scalar() or 0
        activities = db.query(func.count(Activity.id)).scalar() or 0
        remote_budget = db.query(func.sum(Trip.total_budget)).scalar() or Decimal(0)
        activity_spend = db.query(func.sum(Activity.cost)).scalar() or Decimal(0)

        expense_spend = db.query(func.sum(Expense.amount)).scalar() or Decimal(0)

        city_rows = db.query(City.id, City.name, City.country, func.count(Stop.id).label("visits")).join(
            Stop, Stop.city_id == City.id
        ).group_by(City.id, City.name, City.country).order_by(func.count(Stop.id).desc()).limit(top).all()

        category_rows = db.query(Activity.category, func.count(Activity.id)).group_by(
            Activity.category
        ).order_by(func.count(Activity.id).desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Analytics query failed: {e}")
        raise RemoteStoreError("analytics unavailable") from e

    local_trips = local.list_trips()
    local_budget = Decimal(0)
    for trip in local_trips:
        try:
            local_budget += Decimal(str(trip.get("total_budget") or 0))
        except ArithmeticError:
            continue

    return {
        "profiles": profiles,
        "remote_trips": remote_trips,
        "local_trips": len(local_trips),
        "public_trips": remote_public + sum(1 for t in local_trips if t.get("is_public")),
        "stops": stops,
        "activities": activities,
        "total_budget": Decimal(str(remote_budget)) + local_budget,
        "total_spent": Decimal(str(activity_spend)) + Decimal(str(expense_spend)),
        "popular_cities": [
            {"city_id": row.id, "name": row.name, "country": row.country, "visits": row.visits,
             "percentage": float(row.visits / stops * 100) if stops else 0.0}
            for row in city_rows
        ],
        "activity_categories": [
            {"category": category, "count": count, "percentage": pct}
            for category, count, pct in _percentages(category_rows, activities)
        ],
    }
