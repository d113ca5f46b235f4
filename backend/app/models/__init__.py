"""Models package - Import all models for SQLAlchemy registration."""
from app.models.profile import Profile
from app.models.trip import Trip
from app.models.stop import Stop
from app.models.activity import Activity, ActivityCategory
from app.models.expense import Expense, ExpenseCategory
from app.models.city import City, ActivityTemplate

__all__ = [
    "Profile",
    "Trip",
    "Stop",
    "Activity",
    "ActivityCategory",
    "Expense",
    "ExpenseCategory",
    "City",
    "ActivityTemplate",
]
