"""
Synchronization policy between the remote entity store and the local
fallback store.

Routing is decided once per id: ref_for() tags an id as REMOTE or LOCAL and
every read/write/delete dispatches on that tag. Callers never need to know
which backend holds a trip.

Failure semantics:
    reads   remote errors are logged and treated as "not found"
    writes  remote errors propagate as RemoteStoreError; nothing is written
            locally in their place, so the two stores never silently diverge
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from app.core.config import settings
from app.core.exceptions import RemoteStoreError
from app.core.identity import Identity
from app.core.utils import new_local_id, new_remote_id
from app.db.table_client import TableClient
from app.schemas.trip import TripRecord
from app.services.autosave import DebouncedWriter
from app.services.local_store import LocalStore

logger = logging.getLogger(__name__)

_TIMESTAMPS = ("created_at", "updated_at")


class StoreKind(str, enum.Enum):
    """Which store is authoritative for an entity."""
    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True)
class EntityRef:
    """Entity id tagged with the store that owns it."""
    id: str
    kind: StoreKind

    @property
    def is_local(self) -> bool:
        return self.kind is StoreKind.LOCAL


def ref_for(entity_id: str, prefixes: Optional[Sequence[str]] = None) -> EntityRef:
    """Tag an id: the local-origin markers (temp-, mock-) all map to LOCAL."""
    markers = tuple(prefixes if prefixes is not None else settings.LOCAL_ID_PREFIXES)
    kind = StoreKind.LOCAL if entity_id.startswith(markers) else StoreKind.REMOTE
    return EntityRef(id=entity_id, kind=kind)


def new_trip_ref(identity: Identity) -> EntityRef:
    """Fresh id for a trip created by this identity, in the store it writes to."""
    if identity.uses_local_store:
        return EntityRef(id=new_local_id(settings.LOCAL_ID_PREFIX), kind=StoreKind.LOCAL)
    return EntityRef(id=new_remote_id(), kind=StoreKind.REMOTE)


def _matches(record: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    return all(record.get(field) == value for field, value in filters.items())


class TripSync:
    """Trip reads and writes routed by EntityRef."""

    def __init__(self, tables: TableClient, local: LocalStore, writer: Optional[DebouncedWriter] = None):
        self.tables = tables
        self.local = local
        self.writer = writer

    def _from_local(self, record: Optional[Dict[str, Any]]) -> Optional[TripRecord]:
        if record is None:
            return None
        return TripRecord.model_validate(record)

    async def write_trip(self, record: TripRecord, is_new: bool = False) -> TripRecord:
        """
        Persist a trip in the store its id routes to.
        Local: upsert. Remote: insert or update; errors reach the caller.
        """
        ref = ref_for(record.id)
        if ref.is_local:
            stored = self.local.upsert_trip(record.model_dump(mode="json"))
            return TripRecord.model_validate(stored)

        fields = record.model_dump(exclude=set(_TIMESTAMPS))
        if is_new:
            row = await self.tables.insert("trips", fields)
        else:
            patch = {k: v for k, v in fields.items() if k != "id"}
            row = await self.tables.update("trips", record.id, patch)
            if row is None:
                raise RemoteStoreError(f"trip {record.id} no longer exists")
        return TripRecord.model_validate(row)

    async def read_trip(self, trip_id: str, probe_local: bool = False, strict: bool = False) -> Optional[TripRecord]:
        """
        One trip by id. Local ids never touch the remote store. For remote ids a
        remote failure reads as not-found unless strict is set, and probe_local
        also checks the local store on a miss.
        """
        ref = ref_for(trip_id)
        if ref.is_local:
            return self._from_local(self.local.get_trip(trip_id))

        row = None
        try:
            row = await self.tables.get("trips", trip_id)
        except RemoteStoreError as e:
            if strict:
                raise
            logger.warning(f"Remote read of trip {trip_id} failed, treating as not found: {e}")
        if row is not None:
            return TripRecord.model_validate(row)
        if probe_local:
            return self._from_local(self.local.get_trip(trip_id))
        return None

    async def list_trips(self, filters: Dict[str, Any]) -> List[TripRecord]:
        """
        Trips matching equality filters from both stores.

        The remote result comes first; local records matching the same filters
        are added unless a remote row already has the same id. With no remote
        rows (unreachable store, or none for this user) the result is the whole
        matching local collection.
        """
        remote: List[TripRecord] = []
        try:
            rows = await self.tables.select("trips", filters)
            remote = [TripRecord.model_validate(row) for row in rows]
        except RemoteStoreError as e:
            logger.warning(f"Remote trip listing failed, using local store: {e}")

        seen = {trip.id for trip in remote}
        local = []
        for record in self.local.list_trips():
            if record.get("id") in seen or not _matches(record, filters):
                continue
            trip = self._from_local(record)
            local.append(trip)
            seen.add(trip.id)
        return remote + local

    async def delete_trip(self, trip_id: str) -> None:
        """
        Delete by routed id. A remote delete also purges any local copy;
        absent records are not an error. Itinerary sections go with the trip,
        including an edit still waiting on the debounce timer.
        """
        ref = ref_for(trip_id)
        if not ref.is_local:
            await self.tables.delete("trips", trip_id)
        if self.writer is not None:
            self.writer.discard(trip_id)
        self.local.delete_trip(trip_id)
        self.local.delete_sections(trip_id)
