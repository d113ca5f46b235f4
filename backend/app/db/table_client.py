"""
Generic table interface over the remote entity store.

Callers address tables by name and filter by column equality, the same way
the hosted backend is queried from the pages. Every call is a coroutine so the
store can be swapped for a networked client without touching callers.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import RemoteStoreError
from app.models import Profile, Trip, Stop, Activity, Expense, City, ActivityTemplate

logger = logging.getLogger(__name__)

TABLES = {
    "profiles": Profile,
    "trips": Trip,
    "cities": City,
    "stops": Stop,
    "activities": Activity,
    "activity_templates": ActivityTemplate,
    "expenses": Expense,
}

# "start_date" sorts ascending, "-start_date" descending
OrderSpec = Union[str, Sequence[str], None]


def _model_for(table: str):
    try:
        return TABLES[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table}")


def _apply_filters(query, model, filters: Optional[Dict[str, Any]]):
    """Equality filters; list values match any member."""
    for field, value in (filters or {}).items():
        column = getattr(model, field)
        if isinstance(value, (list, tuple, set)):
            query = query.filter(column.in_(list(value)))
        else:
            query = query.filter(column == value)
    return query


def _order_clauses(model, order: OrderSpec) -> List[Any]:
    if not order:
        return []
    if isinstance(order, str):
        order = [order]
    clauses = []
    for field in order:
        descending = field.startswith("-")
        column = getattr(model, field.lstrip("-"))
        clauses.append(column.desc() if descending else column.asc())
    return clauses


class TableClient:
    """select/insert/update/delete against named tables."""

    def __init__(self, db: Session):
        self.db = db

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order: OrderSpec = None,
        limit: Optional[int] = None
    ) -> List[Any]:
        """Rows matching every equality filter (list values match any member)."""
        model = _model_for(table)
        try:
            query = _apply_filters(self.db.query(model), model, filters)
            clauses = _order_clauses(model, order)
            if clauses:
                query = query.order_by(*clauses)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            logger.warning(f"Remote select on {table} failed: {e}")
            raise RemoteStoreError(f"select {table} failed") from e

    async def get(self, table: str, entity_id: str) -> Optional[Any]:
        """Single row by id, or None."""
        rows = await self.select(table, {"id": entity_id}, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, record: Dict[str, Any]) -> Any:
        """Insert one row and return it."""
        model = _model_for(table)
        try:
            row = model(**record)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Remote insert into {table} failed: {e}")
            raise RemoteStoreError(f"insert {table} failed") from e

    async def update(self, table: str, entity_id: str, patch: Dict[str, Any]) -> Optional[Any]:
        """Apply a patch to one row; None when the row does not exist."""
        model = _model_for(table)
        try:
            row = self.db.query(model).filter(model.id == entity_id).first()
            if row is None:
                return None
            for field, value in patch.items():
                setattr(row, field, value)
            self.db.commit()
            self.db.refresh(row)
            return row
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Remote update of {table}/{entity_id} failed: {e}")
            raise RemoteStoreError(f"update {table} failed") from e

    async def delete(self, table: str, entity_id: str) -> bool:
        """Delete one row (ORM cascades apply). False when it did not exist."""
        model = _model_for(table)
        try:
            row = self.db.query(model).filter(model.id == entity_id).first()
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Remote delete of {table}/{entity_id} failed: {e}")
            raise RemoteStoreError(f"delete {table} failed") from e

    async def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """Number of rows matching the filters, with the same list handling as select()."""
        model = _model_for(table)
        try:
            return _apply_filters(self.db.query(model), model, filters).count()
        except SQLAlchemyError as e:
            logger.warning(f"Remote count on {table} failed: {e}")
            raise RemoteStoreError(f"count {table} failed") from e
