"""
Client-side state for the Space Travel front end.

Each container holds what one screen renders (lists, loading flags, error
strings) and talks to any object exposing the Space Travel API surface:
SpaceTravelMockApi in-process or SpaceTravelHttpApi over HTTP. Failed
results and unexpected exceptions end up as error strings, never raised.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import SPACECRAFT_ICONS, UNKNOWN_PLANET_NAME
from fleet_service import parse_capacity, validate_spacecraft_form

GLOBAL_ERROR_KEY = "global"


def _failed(res: Any) -> bool:
    return not isinstance(res, dict) or bool(res.get("isError"))


def _error_message(res: Any, fallback: str) -> str:
    if isinstance(res, dict) and res.get("error"):
        return str(res["error"])
    return fallback


def _field_errors(res: Any) -> Dict[str, str]:
    if isinstance(res, dict):
        return dict(res.get("fieldErrors") or {})
    return {}


def _planet_name(planets: List[Dict[str, Any]], planet_id: Any) -> str:
    for planet in planets:
        if planet.get("id") == planet_id:
            return str(planet.get("name"))
    return UNKNOWN_PLANET_NAME


# ── Stores ─────────────────────────────────────────────────

@dataclass
class PlanetStore:
    api: Any
    planets: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None

    def fetch_planets(self) -> None:
        self.loading = True
        self.error = None
        try:
            res = self.api.get_planets()
            if _failed(res):
                self.error = _error_message(res, "Failed to fetch planets.")
                self.planets = []
            else:
                self.planets = list(res.get("data") or [])
        except Exception as exc:
            logging.exception("Fetching planets failed")
            self.error = str(exc) or "An unexpected error occurred."
            self.planets = []
        finally:
            self.loading = False


@dataclass
class SpacecraftStore:
    api: Any
    spacecrafts: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None

    def fetch_spacecrafts(self) -> None:
        self.loading = True
        self.error = None
        try:
            res = self.api.get_spacecrafts()
            if _failed(res):
                self.error = "Failed to load spacecrafts."
            else:
                self.spacecrafts = list(res.get("data") or [])
        except Exception:
            logging.exception("Fetching spacecrafts failed")
            self.error = "An error occurred while fetching spacecrafts."
        finally:
            self.loading = False

    def add_spacecraft(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Build a spacecraft, show it right away, then re-fetch the list."""
        try:
            res = self.api.build_spacecraft(data)
        except Exception as exc:
            logging.exception("Building spacecraft failed")
            self.error = f"Error adding spacecraft: {exc}"
            return None

        if _failed(res):
            self.error = "Failed to add spacecraft."
            return None

        created = res.get("data")
        self.spacecrafts = [*self.spacecrafts, created]
        self.fetch_spacecrafts()
        return created


@dataclass
class SpaceTravelStore:
    """Planets and spacecraft together, refreshed as a pair after mutations."""

    api: Any
    planets: List[Dict[str, Any]] = field(default_factory=list)
    spacecrafts: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None

    def fetch_planets(self) -> None:
        self.loading = True
        try:
            res = self.api.get_planets()
            if _failed(res):
                self.error = _error_message(res, "Failed to fetch planets.")
            else:
                self.planets = list(res.get("data") or [])
        except Exception:
            logging.exception("Fetching planets failed")
            self.error = "An error occurred while fetching planets."
        finally:
            self.loading = False

    def fetch_spacecrafts(self) -> None:
        self.loading = True
        try:
            res = self.api.get_spacecrafts()
            if _failed(res):
                self.error = _error_message(res, "Failed to load spacecrafts.")
            else:
                self.spacecrafts = list(res.get("data") or [])
        except Exception:
            logging.exception("Fetching spacecrafts failed")
            self.error = "An error occurred while fetching spacecrafts."
        finally:
            self.loading = False

    def refresh_data(self) -> None:
        self.error = None
        self.fetch_planets()
        self.fetch_spacecrafts()

    def planet_name(self, planet_id: Any) -> str:
        return _planet_name(self.planets, planet_id)

    def spacecrafts_on_planet(self, planet_id: Any) -> List[Dict[str, Any]]:
        return [s for s in self.spacecrafts if s.get("currentLocation") == planet_id]


# ── Screens ────────────────────────────────────────────────

@dataclass
class SpacecraftsView:
    api: Any
    spacecrafts: List[Dict[str, Any]] = field(default_factory=list)
    planets: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = True
    error: str = ""
    delete_error: str = ""

    def load(self) -> None:
        self.loading = True
        self.error = ""
        try:
            res = self.api.get_spacecrafts()
            if _failed(res):
                self.error = "Failed to load spacecrafts."
            else:
                self.spacecrafts = list(res.get("data") or [])
        except Exception:
            logging.exception("Fetching spacecrafts failed")
            self.error = "An error occurred while fetching spacecrafts."

        try:
            res = self.api.get_planets()
            if _failed(res):
                self.error = "Failed to load planets."
            else:
                self.planets = list(res.get("data") or [])
        except Exception:
            logging.exception("Fetching planets failed")
            self.error = "An error occurred while fetching planets."
        finally:
            self.loading = False

    def planet_name(self, planet_id: Any) -> str:
        return _planet_name(self.planets, planet_id)

    def destroy(self, spacecraft_id: str) -> bool:
        """Remove the spacecraft from the list first; put it back if the call fails."""
        previous = list(self.spacecrafts)
        self.spacecrafts = [s for s in self.spacecrafts if s.get("id") != spacecraft_id]
        self.delete_error = ""
        try:
            res = self.api.destroy_spacecraft_by_id(spacecraft_id)
            failed = _failed(res)
        except Exception:
            logging.exception("Destroying spacecraft %s failed", spacecraft_id)
            failed = True

        if failed:
            self.spacecrafts = previous
            self.delete_error = "An error occurred while deleting spacecraft."
            return False
        return True


@dataclass
class SpacecraftView:
    api: Any
    spacecraft_id: str
    spacecraft: Optional[Dict[str, Any]] = None
    loading: bool = True
    error: str = ""
    destroyed: bool = False

    def load(self) -> None:
        self.loading = True
        self.error = ""
        try:
            res = self.api.get_spacecraft_by_id(self.spacecraft_id)
            if _failed(res):
                self.spacecraft = None
                self.error = _error_message(res, "Spacecraft not found")
            else:
                self.spacecraft = res.get("data")
        except Exception:
            logging.exception("Fetching spacecraft %s failed", self.spacecraft_id)
            self.error = "An error occurred while fetching spacecraft."
        finally:
            self.loading = False

    def destroy(self) -> bool:
        try:
            res = self.api.destroy_spacecraft_by_id(self.spacecraft_id)
        except Exception:
            logging.exception("Destroying spacecraft %s failed", self.spacecraft_id)
            self.error = "An error occurred while deleting spacecraft."
            return False

        if _failed(res):
            self.error = _error_message(res, "Failed to delete spacecraft.")
            return False
        self.destroyed = True
        self.spacecraft = None
        return True


def _empty_form() -> Dict[str, Any]:
    return {
        "name": "",
        "capacity": "",
        "description": "",
        "pictureUrl": SPACECRAFT_ICONS[0],
    }


@dataclass
class ConstructionView:
    api: Any
    store: Optional[SpaceTravelStore] = None
    form_data: Dict[str, Any] = field(default_factory=_empty_form)
    errors: Dict[str, str] = field(default_factory=dict)
    submitting: bool = False

    def set_field(self, name: str, value: Any) -> None:
        self.form_data[name] = value
        self.errors.pop(name, None)

    def select_icon(self, url: str) -> None:
        if url not in SPACECRAFT_ICONS:
            raise ValueError(f"Unknown spacecraft icon: {url}")
        self.form_data["pictureUrl"] = url

    def validate(self) -> Dict[str, str]:
        self.errors = validate_spacecraft_form(self.form_data)
        return self.errors

    def submit(self) -> Optional[Dict[str, Any]]:
        """Validate and build. Returns the new spacecraft, or None with ``errors`` set."""
        if self.validate():
            return None

        payload = copy.deepcopy(self.form_data)
        payload["capacity"] = parse_capacity(payload["capacity"])
        payload["currentLocation"] = None

        self.submitting = True
        try:
            res = self.api.build_spacecraft(payload)
        except Exception as exc:
            logging.exception("Building spacecraft failed")
            self.errors = {"form": f"Error processing spacecraft: {exc}"}
            return None
        finally:
            self.submitting = False

        if _failed(res):
            self.errors = _field_errors(res) or {
                "form": _error_message(res, "Failed to build spacecraft.")
            }
            return None

        if self.store is not None:
            self.store.refresh_data()
        self.form_data = _empty_form()
        return res.get("data")


@dataclass
class PlanetsView:
    """Planets with their stationed spacecraft and per-spacecraft dispatch controls."""

    api: Any
    planets: List[Dict[str, Any]] = field(default_factory=list)
    spacecrafts: List[Dict[str, Any]] = field(default_factory=list)
    selected_targets: Dict[str, Optional[int]] = field(default_factory=dict)
    dispatching: Dict[str, bool] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    loading: bool = True

    def fetch_data(self) -> None:
        self.loading = True
        self.errors = {}
        try:
            planet_res = self.api.get_planets()
            spacecraft_res = self.api.get_spacecrafts()
            if not _failed(planet_res) and not _failed(spacecraft_res):
                self.planets = list(planet_res.get("data") or [])
                self.spacecrafts = list(spacecraft_res.get("data") or [])
            else:
                self.errors = {GLOBAL_ERROR_KEY: "Failed to fetch data. Please try again later."}
        except Exception:
            logging.exception("Fetching planets and spacecrafts failed")
            self.errors = {GLOBAL_ERROR_KEY: "An error occurred while fetching data."}
        finally:
            self.loading = False

    def select_target(self, spacecraft_id: str, value: Any) -> None:
        if value is None or str(value).strip() == "":
            self.selected_targets[spacecraft_id] = None
            return
        try:
            self.selected_targets[spacecraft_id] = int(value)
        except (TypeError, ValueError):
            self.selected_targets[spacecraft_id] = None

    def stationed(self) -> List[Dict[str, Any]]:
        return [
            {
                **planet,
                "stationed": [s for s in self.spacecrafts if s.get("currentLocation") == planet.get("id")],
            }
            for planet in self.planets
        ]

    def _spacecraft(self, spacecraft_id: str) -> Optional[Dict[str, Any]]:
        for spacecraft in self.spacecrafts:
            if spacecraft.get("id") == spacecraft_id:
                return spacecraft
        return None

    def available_targets(self, spacecraft_id: str) -> List[Dict[str, Any]]:
        spacecraft = self._spacecraft(spacecraft_id)
        if spacecraft is None:
            return []
        return [p for p in self.planets if p.get("id") != spacecraft.get("currentLocation")]

    def is_dispatching(self, spacecraft_id: str) -> bool:
        return bool(self.dispatching.get(spacecraft_id))

    def dispatch(self, spacecraft_id: str) -> bool:
        target_id = self.selected_targets.get(spacecraft_id)
        self.errors[spacecraft_id] = ""

        if target_id is None:
            self.errors[spacecraft_id] = "Please select a destination planet."
            return False

        spacecraft = self._spacecraft(spacecraft_id)
        current_location = spacecraft.get("currentLocation") if spacecraft else None
        if target_id == current_location:
            self.errors[spacecraft_id] = "Cannot dispatch to the same planet!"
            return False

        self.dispatching[spacecraft_id] = True
        try:
            res = self.api.send_spacecraft_to_planet(spacecraft_id, target_id)
            if _failed(res):
                self.errors[spacecraft_id] = _error_message(res, "Failed to dispatch spacecraft. Please try again.")
                return False

            self.spacecrafts = [
                {**s, "currentLocation": target_id} if s.get("id") == spacecraft_id else s
                for s in self.spacecrafts
            ]
            planet_res = self.api.get_planets()
            if not _failed(planet_res):
                self.planets = list(planet_res.get("data") or [])
            self.selected_targets.pop(spacecraft_id, None)
            return True
        except Exception:
            logging.exception("Dispatching spacecraft %s failed", spacecraft_id)
            self.errors[spacecraft_id] = "Error while dispatching spacecraft."
            return False
        finally:
            self.dispatching[spacecraft_id] = False
