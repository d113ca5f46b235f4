"""
Admin routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.identity import Identity
from app.db.session import get_db
from app.schemas.admin import AnalyticsResponse
from app.services.analytics_service import collect_analytics
from app.services.local_store import LocalStore
from app.api.dependencies import get_local_store, require_admin

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
    local: LocalStore = Depends(get_local_store)
):
    """Platform-wide counts and totals. Read-only."""
    return collect_analytics(db, local)
