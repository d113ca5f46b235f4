"""
Shared route dependencies: session identity and per-request services.
"""
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session
from app.core.identity import Identity, anonymous_identity, identity_from_claims
from app.core.security import decode_access_token
from app.db.session import get_db
from app.db.table_client import TableClient
from app.services.autosave import DebouncedWriter
from app.services.community_service import CommunityService
from app.services.itinerary_service import ItineraryService
from app.services.local_store import LocalStore
from app.services.sync_service import TripSync
from app.services.trip_service import TripService


def get_current_identity(authorization: Optional[str] = Header(None)) -> Identity:
    """
    Identity from the bearer token. Requests without a token act as the
    anonymous demo identity; a token that does not verify is rejected.
    """
    if not authorization:
        return anonymous_identity()
    if not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header"
        )
    payload = decode_access_token(authorization.split(" ", 1)[1])
    identity = identity_from_claims(payload) if payload else None
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials"
        )
    return identity


def require_user(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Any signed-in identity."""
    if identity.is_anonymous:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return identity


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return identity


def get_local_store(request: Request) -> LocalStore:
    return request.app.state.local_store


def get_writer(request: Request) -> DebouncedWriter:
    return request.app.state.writer


def get_table_client(db: Session = Depends(get_db)) -> TableClient:
    return TableClient(db)


def get_trip_sync(
    tables: TableClient = Depends(get_table_client),
    local: LocalStore = Depends(get_local_store),
    writer: DebouncedWriter = Depends(get_writer)
) -> TripSync:
    return TripSync(tables, local, writer)


def get_trip_service(
    sync: TripSync = Depends(get_trip_sync),
    tables: TableClient = Depends(get_table_client)
) -> TripService:
    return TripService(sync, tables)


def get_itinerary_service(
    sync: TripSync = Depends(get_trip_sync),
    local: LocalStore = Depends(get_local_store),
    writer: DebouncedWriter = Depends(get_writer)
) -> ItineraryService:
    return ItineraryService(sync, local, writer)


def get_community_service(local: LocalStore = Depends(get_local_store)) -> CommunityService:
    return CommunityService(local)
