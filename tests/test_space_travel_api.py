"""Mock API tests: every call returns an {isError, data} / {isError, error} result."""

import sqlite3
import time

import fleet_service
from constants import SEED_PLANETS, SEED_SPACECRAFTS


class TestResultShapes:
    def test_construction_seeds_storage(self, mock_api):
        assert mock_api.get_planets() == {"isError": False, "data": SEED_PLANETS}
        assert mock_api.get_spacecrafts() == {"isError": False, "data": SEED_SPACECRAFTS}

    def test_get_by_id(self, mock_api):
        res = mock_api.get_spacecraft_by_id("sc-1")
        assert res["isError"] is False
        assert res["data"]["name"] == "Odyssey"

    def test_get_by_id_missing(self, mock_api):
        assert mock_api.get_spacecraft_by_id("nope") == {"isError": True, "error": "Spacecraft not found"}

    def test_build(self, mock_api):
        res = mock_api.build_spacecraft({"name": "Ark", "capacity": "9", "description": "d"})
        assert res["isError"] is False
        assert res["data"]["capacity"] == 9
        assert len(mock_api.get_spacecrafts()["data"]) == 3

    def test_build_invalid_reports_field_errors(self, mock_api):
        res = mock_api.build_spacecraft({"name": "Ark"})
        assert res["isError"] is True
        assert res["fieldErrors"] == {
            "capacity": "Capacity is required",
            "description": "Description is required",
        }
        assert "Capacity is required" in res["error"]

    def test_destroy(self, mock_api):
        assert mock_api.destroy_spacecraft_by_id("sc-2")["isError"] is False
        assert mock_api.destroy_spacecraft_by_id("sc-2") == {"isError": True, "error": "Spacecraft not found"}

    def test_dispatch(self, mock_api):
        res = mock_api.send_spacecraft_to_planet("sc-2", 3)
        assert res == {
            "isError": False,
            "data": {"spacecraftId": "sc-2", "fromPlanetId": 1, "toPlanetId": 3, "transferred": 500_000},
        }
        planets = {p["id"]: p for p in mock_api.get_planets()["data"]}
        assert planets[3]["currentPopulation"] == 500_000

    def test_dispatch_same_planet(self, mock_api):
        res = mock_api.send_spacecraft_to_planet("sc-1", 1)
        assert res == {"isError": True, "error": "Target planet is the same as current location"}

    def test_dispatch_fractional_target(self, mock_api):
        res = mock_api.send_spacecraft_to_planet("sc-1", 2.9)
        assert res == {"isError": True, "error": "Please select a destination planet."}
        planets = {p["id"]: p for p in mock_api.get_planets()["data"]}
        assert planets[2]["currentPopulation"] == 0

    def test_destroy_returns_removed_spacecraft(self, mock_api):
        res = mock_api.destroy_spacecraft_by_id("sc-2")
        assert res == {"isError": False, "data": SEED_SPACECRAFTS[1]}

    def test_corrupt_storage_is_an_error_result(self, mock_api):
        mock_api.storage.set_item("planets", "{not json")
        res = mock_api.get_planets()
        assert res["isError"] is True
        assert res["error"]

    def test_locked_database_is_an_error_result(self, mock_api, monkeypatch):
        def locked(storage):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(fleet_service, "get_spacecrafts", locked)
        assert mock_api.get_spacecrafts() == {"isError": True, "error": "database is locked"}


class TestDelay:
    def test_negative_delay_clamped(self, storage):
        from space_travel_api import SpaceTravelMockApi
        assert SpaceTravelMockApi(storage, delay_s=-1).delay_s == 0.0

    def test_delay_applied(self, storage):
        from space_travel_api import SpaceTravelMockApi
        api = SpaceTravelMockApi(storage, delay_s=0.02)
        t0 = time.monotonic()
        api.get_planets()
        assert time.monotonic() - t0 >= 0.02
