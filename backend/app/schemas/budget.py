"""
Pydantic schemas for trip budget summaries.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class BudgetCategoryItem(BaseModel):
    """Expense spending in one category."""
    category: str
    amount: Decimal
    expense_count: int
    percentage_of_total: float  # Percentage of total spending (0-100)


class BudgetSummary(BaseModel):
    """Spend totals: activities plus expenses against the trip budget."""
    total_budget: Decimal
    activities_cost: Decimal
    expenses_cost: Decimal
    total_spent: Decimal
    remaining: Decimal  # May be negative
    fill_ratio: float  # Percentage of budget used
    categories: List[BudgetCategoryItem] = []
