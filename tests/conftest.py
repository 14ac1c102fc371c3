"""
Shared pytest fixtures for the Space Travel service tests.

Provides:
  - In-memory SQLite DB with migrations applied
  - LocalStorage over that DB, empty or seeded
  - The in-process mock API
  - FastAPI TestClient on a temp-dir database, reset before each test
  - An HTTP API client routed through the TestClient
"""

import json
import os
import sqlite3
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so we can import app modules
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Use a writable temp directory for the test DB so the app startup succeeds.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="space_travel_test_")
os.environ["DB_DIR"] = _TEST_DB_DIR
os.environ["DB_PATH"] = str(Path(_TEST_DB_DIR) / "space_travel.db")
os.environ["SPACE_TRAVEL_API_DELAY_S"] = "0"


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def db_conn() -> Generator[sqlite3.Connection, None, None]:
    """Yield an in-memory SQLite connection with all migrations applied."""
    from db_migrations import apply_migrations

    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    apply_migrations(conn)

    yield conn
    conn.close()


@pytest.fixture()
def storage(db_conn: sqlite3.Connection):
    from local_storage import LocalStorage
    return LocalStorage(db_conn)


@pytest.fixture()
def seeded_storage(storage):
    """storage with the default planets and spacecraft loaded."""
    import fleet_service
    fleet_service.initialize_data(storage)
    return storage


@pytest.fixture()
def mock_api(storage):
    from space_travel_api import SpaceTravelMockApi
    return SpaceTravelMockApi(storage, delay_s=0)


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    """Return a Starlette TestClient wired to the FastAPI app, with fresh seed data."""
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as c:
        r = c.post("/api/admin/reset")
        assert r.status_code == 200
        yield c


@pytest.fixture()
def http_api(client):
    """SpaceTravelHttpApi that sends its requests through the TestClient."""
    from space_travel_client import SpaceTravelHttpApi
    return SpaceTravelHttpApi(base_url="http://testserver", session=client)


# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    """Stateless helper methods for common test-data operations."""

    @staticmethod
    def write_planets(storage, planets) -> None:
        from constants import PLANETS_KEY
        with storage.transaction():
            storage.set_item(PLANETS_KEY, json.dumps(planets))

    @staticmethod
    def write_spacecrafts(storage, spacecrafts) -> None:
        from constants import SPACECRAFTS_KEY
        with storage.transaction():
            storage.set_item(SPACECRAFTS_KEY, json.dumps(spacecrafts))

    @staticmethod
    def planet(planet_id: int, population: int = 0, name: str = "") -> Dict[str, Any]:
        return {
            "id": planet_id,
            "name": name or f"Planet {planet_id}",
            "currentPopulation": population,
            "pictureUrl": "",
        }

    @staticmethod
    def spacecraft(spacecraft_id: str = "sc-test", capacity: int = 100, location: Any = 1) -> Dict[str, Any]:
        return {
            "id": spacecraft_id,
            "name": f"Ship {spacecraft_id}",
            "capacity": capacity,
            "description": "Test vessel",
            "pictureUrl": "",
            "currentLocation": location,
        }


@pytest.fixture()
def helpers() -> TestHelpers:
    return TestHelpers()
