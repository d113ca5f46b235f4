"""
Expense model for tracking spending.
"""
import enum
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class ExpenseCategory(str, enum.Enum):
    """Expense categories."""
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    FOOD = "food"
    ACTIVITIES = "activities"
    OTHER = "other"


class Expense(BaseModel):
    """Expense model representing a single spending event on a trip."""
    __tablename__ = "expenses"

    trip_id = Column(String(64), ForeignKey("trips.id"), nullable=False, index=True)
    stop_id = Column(String(64), ForeignKey("stops.id", ondelete="SET NULL"), nullable=True, index=True)
    category = Column(String(50), nullable=False, default=ExpenseCategory.OTHER.value)
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(Text, nullable=True)
    expense_date = Column(Date, nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
