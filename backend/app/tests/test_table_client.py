"""
Tests for the remote table client against the test database.
"""
import asyncio
from app.db.session import SessionLocal
from app.db.table_client import TableClient


def test_count_matches_select_for_list_filters(client):
    db = SessionLocal()
    try:
        tables = TableClient(db)
        filters = {"name": ["Paris", "Tokyo", "Atlantis"]}
        rows = asyncio.run(tables.select("cities", filters))
        assert sorted(row.name for row in rows) == ["Paris", "Tokyo"]
        assert asyncio.run(tables.count("cities", filters)) == 2
        assert asyncio.run(tables.count("cities", {"name": "Paris"})) == 1
    finally:
        db.close()
