"""
Mock Space Travel API.

Wraps fleet_service so every call returns a result dict instead of raising:
``{"isError": False, "data": ...}`` on success and
``{"isError": True, "error": "<message>"}`` on failure. An optional delay
simulates network latency.
"""

import json
import logging
import os
import sqlite3
import time
from typing import Any, Callable, Dict

import fleet_service
from dispatch_service import SpaceTravelError
from local_storage import LocalStorage

SPACE_TRAVEL_API_DELAY_S = float(os.environ.get("SPACE_TRAVEL_API_DELAY_S", "0"))


def ok_result(data: Any) -> Dict[str, Any]:
    return {"isError": False, "data": data}


def error_result(error: str, **extra: Any) -> Dict[str, Any]:
    return {"isError": True, "error": error, **extra}


class SpaceTravelMockApi:
    def __init__(self, storage: LocalStorage, delay_s: float = SPACE_TRAVEL_API_DELAY_S):
        self.storage = storage
        self.delay_s = max(0.0, float(delay_s))
        fleet_service.initialize_data(storage)

    def _delay(self) -> None:
        if self.delay_s > 0.0:
            time.sleep(self.delay_s)

    def _call(self, op: Callable[[], Any]) -> Dict[str, Any]:
        self._delay()
        try:
            return ok_result(op())
        except fleet_service.SpacecraftValidationError as exc:
            return error_result(str(exc), fieldErrors=exc.field_errors)
        except SpaceTravelError as exc:
            logging.info("Mock API call rejected: %s", exc)
            return error_result(str(exc))
        except (json.JSONDecodeError, sqlite3.OperationalError) as exc:
            logging.exception("Mock API call failed")
            return error_result(str(exc))

    def get_planets(self) -> Dict[str, Any]:
        return self._call(lambda: fleet_service.get_planets(self.storage))

    def get_spacecrafts(self) -> Dict[str, Any]:
        return self._call(lambda: fleet_service.get_spacecrafts(self.storage))

    def get_spacecraft_by_id(self, spacecraft_id: str) -> Dict[str, Any]:
        return self._call(lambda: fleet_service.get_spacecraft_by_id(self.storage, spacecraft_id))

    def build_spacecraft(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._call(lambda: fleet_service.build_spacecraft(self.storage, data))

    def destroy_spacecraft_by_id(self, spacecraft_id: str) -> Dict[str, Any]:
        return self._call(lambda: fleet_service.destroy_spacecraft_by_id(self.storage, spacecraft_id))

    def send_spacecraft_to_planet(self, spacecraft_id: str, target_planet_id: Any) -> Dict[str, Any]:
        return self._call(
            lambda: fleet_service.send_spacecraft_to_planet(self.storage, spacecraft_id, target_planet_id)
        )
