"""
Tests for the local fallback store.
"""
from app.services.local_store import FileStorage, LocalStore, MemoryStorage, SAMPLE_TRIPS


class BrokenStorage:
    """Medium that fails on every call."""

    def get_item(self, key):
        raise OSError("storage unavailable")

    def set_item(self, key, value):
        raise OSError("storage unavailable")

    def remove_item(self, key):
        raise OSError("storage unavailable")


def test_initialize_seeds_once():
    store = LocalStore(MemoryStorage())
    store.initialize()
    assert [t["id"] for t in store.list_trips()] == ["mock-1", "mock-2", "mock-3"]

    store.delete_trip("mock-1")
    store.initialize()
    assert [t["id"] for t in store.list_trips()] == ["mock-2", "mock-3"]


def test_list_initializes_empty_namespace():
    store = LocalStore(MemoryStorage())
    assert len(store.list_trips()) == len(SAMPLE_TRIPS)


def test_upsert_get_delete():
    store = LocalStore(MemoryStorage(), seed_trips=[])
    stored = store.upsert_trip({"id": "temp-1", "name": "First"})
    assert stored["created_at"] == stored["updated_at"]

    store.upsert_trip({"id": "temp-1", "name": "Renamed"})
    assert store.get_trip("temp-1")["name"] == "Renamed"
    assert len(store.list_trips()) == 1

    store.delete_trip("temp-1")
    store.delete_trip("temp-1")
    assert store.get_trip("temp-1") is None


def test_corrupt_value_reads_as_empty():
    storage = MemoryStorage()
    storage.set_item("globe_trotter_trips", "{not json")
    storage.set_item("globe_trotter_itinerary_sections", "[1, 2]")
    store = LocalStore(storage)
    assert store.list_trips() == []
    assert store.get_sections("mock-1") is None


def test_unavailable_storage_never_raises():
    store = LocalStore(BrokenStorage())
    store.initialize()
    assert store.list_trips() == []
    assert store.upsert_trip({"id": "temp-1", "name": "x"})["id"] == "temp-1"
    store.delete_trip("temp-1")
    store.clear_trips()
    store.save_sections("temp-1", [])
    assert store.get_posts() is None


def test_sections_round_trip():
    store = LocalStore(MemoryStorage())
    sections = [{"id": "s1", "title": "Arrive"}]
    store.save_sections("mock-1", sections)
    store.save_sections("mock-2", [])
    assert store.get_sections("mock-1") == sections
    store.delete_sections("mock-1")
    assert store.get_sections("mock-1") is None
    assert store.get_sections("mock-2") == []


def test_clear_trips_reseeds_on_next_read():
    store = LocalStore(MemoryStorage())
    store.upsert_trip({"id": "temp-9", "name": "Extra"})
    store.clear_trips()
    assert [t["id"] for t in store.list_trips()] == ["mock-1", "mock-2", "mock-3"]


def test_file_storage_persists(tmp_path):
    path = tmp_path / "store" / "local.json"
    LocalStore(FileStorage(str(path)), seed_trips=[]).upsert_trip({"id": "temp-1", "name": "Saved"})

    reopened = LocalStore(FileStorage(str(path)), seed_trips=[])
    assert reopened.get_trip("temp-1")["name"] == "Saved"


def test_file_storage_corrupt_file(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("not json at all")
    store = LocalStore(FileStorage(str(path)))
    assert store.list_trips() == []
