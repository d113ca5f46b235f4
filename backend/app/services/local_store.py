"""
Local fallback store: process-local key-value persistence that stands in for
the remote entity store in demo/offline sessions.

Values are JSON strings under namespaced keys, mirroring browser local storage:
    <namespace>_trips               JSON array of trip records
    <namespace>_itinerary_sections  JSON object trip id -> array of sections
    <namespace>_community_posts     JSON array of community posts

Every operation is best-effort. A corrupt or unavailable medium reads as an
empty collection and turns writes into logged no-ops; nothing here raises.
"""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional
from app.core.utils import utcnow_iso

logger = logging.getLogger(__name__)

TRIPS_KEY = "trips"
SECTIONS_KEY = "itinerary_sections"
POSTS_KEY = "community_posts"

# Seeded on first run so the demo has something to show
SAMPLE_TRIPS: List[Dict[str, Any]] = [
    {
        "id": "mock-1",
        "owner_id": "temp-user",
        "name": "Summer Europe Adventure",
        "description": "Exploring the beautiful cities of Europe during summer",
        "start_date": "2024-06-15",
        "end_date": "2024-07-15",
        "cover_photo_url": "https://images.pexels.com/photos/346885/pexels-photo-346885.jpeg",
        "is_public": False,
        "total_budget": "5000",
        "city": "Paris",
        "country": "France",
    },
    {
        "id": "mock-2",
        "owner_id": "temp-user",
        "name": "Tokyo & Kyoto Discovery",
        "description": "Immersing in Japanese culture and cuisine",
        "start_date": "2024-08-01",
        "end_date": "2024-08-14",
        "cover_photo_url": "https://picsum.photos/200",
        "is_public": True,
        "total_budget": "3500",
        "city": "Tokyo",
        "country": "Japan",
    },
    {
        "id": "mock-3",
        "owner_id": "temp-user",
        "name": "Bali Beach Paradise",
        "description": "Relaxing on beautiful beaches and exploring tropical islands",
        "start_date": "2024-09-10",
        "end_date": "2024-09-24",
        "cover_photo_url": "https://picsum.photos/seed/picsum/200/300",
        "is_public": False,
        "total_budget": "2500",
        "city": "Bali",
        "country": "Indonesia",
    },
]

_STORE_ERRORS = (OSError, ValueError, TypeError)


class MemoryStorage:
    """Key-value medium held in process memory."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Key-value medium persisted as one JSON object in a file."""

    def __init__(self, path: str):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


def storage_from_path(path: str):
    """FileStorage for a path, MemoryStorage for an empty one."""
    return FileStorage(path) if path else MemoryStorage()


class LocalStore:
    """Trips, itinerary sections and community posts in the local medium."""

    def __init__(self, storage, namespace: str = "globe_trotter", seed_trips: Optional[List[Dict[str, Any]]] = None):
        self.storage = storage
        self.namespace = namespace
        self.seed_trips = SAMPLE_TRIPS if seed_trips is None else seed_trips

    def _key(self, name: str) -> str:
        return f"{self.namespace}_{name}"

    def _read(self, name: str) -> Any:
        """Decoded value under a key, None when absent or unreadable."""
        try:
            raw = self.storage.get_item(self._key(name))
            if raw is None:
                return None
            return json.loads(raw)
        except _STORE_ERRORS as e:
            logger.error(f"Error reading local store key {name}: {e}")
            return None

    def _write(self, name: str, value: Any) -> bool:
        try:
            self.storage.set_item(self._key(name), json.dumps(value))
            return True
        except _STORE_ERRORS as e:
            logger.error(f"Error writing local store key {name}: {e}")
            return False

    def _has(self, name: str) -> bool:
        try:
            return self.storage.get_item(self._key(name)) is not None
        except _STORE_ERRORS as e:
            logger.error(f"Error probing local store key {name}: {e}")
            return False

    # Trips

    def initialize(self) -> None:
        """Seed sample trips when the namespace is empty; never overwrites."""
        if self._has(TRIPS_KEY):
            return
        now = utcnow_iso()
        seeded = [dict(trip, created_at=now, updated_at=now) for trip in self.seed_trips]
        if self._write(TRIPS_KEY, seeded):
            logger.info(f"Seeded local store with {len(seeded)} sample trips")

    def list_trips(self) -> List[Dict[str, Any]]:
        """Full collection in stored order; callers sort and filter."""
        if not self._has(TRIPS_KEY):
            self.initialize()
        trips = self._read(TRIPS_KEY)
        if not isinstance(trips, list):
            if trips is not None:
                logger.error("Local trips collection is corrupt, treating as empty")
            return []
        return [trip for trip in trips if isinstance(trip, dict)]

    def get_trip(self, trip_id: str) -> Optional[Dict[str, Any]]:
        for trip in self.list_trips():
            if trip.get("id") == trip_id:
                return copy.deepcopy(trip)
        return None

    def upsert_trip(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Replace by id or append, stamping updated_at (and created_at on insert)."""
        trips = self.list_trips()
        now = utcnow_iso()
        stored = dict(record, updated_at=now)
        for index, trip in enumerate(trips):
            if trip.get("id") == record.get("id"):
                trips[index] = stored
                break
        else:
            stored["created_at"] = now
            trips.append(stored)
        self._write(TRIPS_KEY, trips)
        return copy.deepcopy(stored)

    def delete_trip(self, trip_id: str) -> None:
        """Remove by id; absent ids are a no-op."""
        trips = self.list_trips()
        remaining = [trip for trip in trips if trip.get("id") != trip_id]
        if len(remaining) != len(trips):
            self._write(TRIPS_KEY, remaining)

    def clear_trips(self) -> None:
        try:
            self.storage.remove_item(self._key(TRIPS_KEY))
        except _STORE_ERRORS as e:
            logger.error(f"Error clearing local trips: {e}")

    # Itinerary sections

    def _sections_map(self) -> Dict[str, List[Dict[str, Any]]]:
        sections = self._read(SECTIONS_KEY)
        if not isinstance(sections, dict):
            if sections is not None:
                logger.error("Local itinerary sections map is corrupt, treating as empty")
            return {}
        return sections

    def get_sections(self, trip_id: str) -> Optional[List[Dict[str, Any]]]:
        sections = self._sections_map().get(trip_id)
        return sections if isinstance(sections, list) else None

    def save_sections(self, trip_id: str, sections: List[Dict[str, Any]]) -> None:
        """Whole-list replace for one trip id."""
        all_sections = self._sections_map()
        all_sections[trip_id] = sections
        self._write(SECTIONS_KEY, all_sections)

    def delete_sections(self, trip_id: str) -> None:
        all_sections = self._sections_map()
        if trip_id in all_sections:
            del all_sections[trip_id]
            self._write(SECTIONS_KEY, all_sections)

    # Community posts

    def get_posts(self) -> Optional[List[Dict[str, Any]]]:
        posts = self._read(POSTS_KEY)
        return posts if isinstance(posts, list) else None

    def save_posts(self, posts: List[Dict[str, Any]]) -> None:
        self._write(POSTS_KEY, posts)
