"""
Fleet operations over local storage.

Planets and spacecraft live as two JSON arrays under fixed keys. Every
mutation reads both arrays, applies the change and writes them back inside
one storage transaction.
"""

import copy
import logging
import time
from typing import Any, Dict, List, Optional

from constants import (
    DEFAULT_HOME_PLANET_ID,
    DEFAULT_SPACECRAFT_PICTURE_URL,
    PLANETS_KEY,
    SEED_PLANETS,
    SEED_SPACECRAFTS,
    SPACECRAFT_ID_PREFIX,
    SPACECRAFTS_KEY,
)
from dispatch_service import (
    DispatchError,
    SpaceTravelError,
    SpacecraftNotFoundError,
    dispatch_spacecraft,
    find_planet,
    find_spacecraft,
)
from local_storage import LocalStorage


class SpacecraftValidationError(SpaceTravelError):
    status_code = 400

    def __init__(self, field_errors: Dict[str, str]):
        self.field_errors = dict(field_errors)
        super().__init__("; ".join(field_errors.values()) or "Invalid spacecraft")


# ── Seeding ────────────────────────────────────────────────

def initialize_data(storage: LocalStorage) -> Dict[str, bool]:
    """Seed planets and spacecraft for any key that is missing."""
    seeded = {PLANETS_KEY: False, SPACECRAFTS_KEY: False}
    with storage.transaction():
        if storage.get_item(PLANETS_KEY) is None:
            storage.set_json(PLANETS_KEY, copy.deepcopy(SEED_PLANETS))
            seeded[PLANETS_KEY] = True
        if storage.get_item(SPACECRAFTS_KEY) is None:
            storage.set_json(SPACECRAFTS_KEY, copy.deepcopy(SEED_SPACECRAFTS))
            seeded[SPACECRAFTS_KEY] = True
    if any(seeded.values()):
        logging.info("Seeded local storage keys: %s", ", ".join(k for k, v in seeded.items() if v))
    return seeded


def reset_data(storage: LocalStorage) -> None:
    with storage.transaction():
        storage.remove_item(PLANETS_KEY)
        storage.remove_item(SPACECRAFTS_KEY)
        initialize_data(storage)


# ── Reads ──────────────────────────────────────────────────

def load_planets(storage: LocalStorage) -> List[Dict[str, Any]]:
    return list(storage.get_json(PLANETS_KEY, []) or [])


def load_spacecrafts(storage: LocalStorage) -> List[Dict[str, Any]]:
    return list(storage.get_json(SPACECRAFTS_KEY, []) or [])


def get_planets(storage: LocalStorage) -> List[Dict[str, Any]]:
    return load_planets(storage)


def get_spacecrafts(storage: LocalStorage) -> List[Dict[str, Any]]:
    return load_spacecrafts(storage)


def get_spacecraft_by_id(storage: LocalStorage, spacecraft_id: str) -> Dict[str, Any]:
    spacecraft = find_spacecraft(load_spacecrafts(storage), spacecraft_id)
    if spacecraft is None:
        raise SpacecraftNotFoundError()
    return spacecraft


# ── Build ──────────────────────────────────────────────────

def parse_capacity(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def validate_spacecraft_form(data: Dict[str, Any]) -> Dict[str, str]:
    """Return per-field error messages for a new spacecraft; empty when valid."""
    errors: Dict[str, str] = {}
    if not str(data.get("name") or "").strip():
        errors["name"] = "Name is required"

    raw_capacity = data.get("capacity")
    if raw_capacity is None or str(raw_capacity).strip() == "":
        errors["capacity"] = "Capacity is required"
    else:
        capacity = parse_capacity(raw_capacity)
        if capacity is None:
            errors["capacity"] = "Capacity must be a number"
        elif capacity < 1:
            errors["capacity"] = "Capacity must be at least 1"

    if not str(data.get("description") or "").strip():
        errors["description"] = "Description is required"
    return errors


def _next_spacecraft_id(spacecrafts: List[Dict[str, Any]]) -> str:
    taken = {str(s.get("id")) for s in spacecrafts}
    base = f"{SPACECRAFT_ID_PREFIX}{int(time.time() * 1000)}"
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def build_spacecraft(storage: LocalStorage, data: Dict[str, Any]) -> Dict[str, Any]:
    errors = validate_spacecraft_form(data)
    if errors:
        raise SpacecraftValidationError(errors)

    with storage.transaction():
        planets = load_planets(storage)
        spacecrafts = load_spacecrafts(storage)

        location = data.get("currentLocation")
        if location is None or find_planet(planets, location) is None:
            location = DEFAULT_HOME_PLANET_ID

        spacecraft = {
            "id": _next_spacecraft_id(spacecrafts),
            "name": str(data["name"]).strip(),
            "capacity": parse_capacity(data["capacity"]),
            "description": str(data["description"]).strip(),
            "pictureUrl": str(data.get("pictureUrl") or "").strip() or DEFAULT_SPACECRAFT_PICTURE_URL,
            "currentLocation": location,
        }
        spacecrafts.append(spacecraft)
        storage.set_json(SPACECRAFTS_KEY, spacecrafts)

    logging.info("Built spacecraft %s (%s) at planet %s", spacecraft["id"], spacecraft["name"], location)
    return spacecraft


# ── Destroy ────────────────────────────────────────────────

def destroy_spacecraft_by_id(storage: LocalStorage, spacecraft_id: str) -> Dict[str, Any]:
    with storage.transaction():
        spacecrafts = load_spacecrafts(storage)
        removed = find_spacecraft(spacecrafts, spacecraft_id)
        if removed is None:
            raise SpacecraftNotFoundError()
        storage.set_json(SPACECRAFTS_KEY, [s for s in spacecrafts if s.get("id") != spacecraft_id])

    logging.info("Destroyed spacecraft %s (%s)", removed["id"], removed.get("name"))
    return removed


# ── Dispatch ───────────────────────────────────────────────

def parse_planet_id(raw: Any) -> Optional[int]:
    """Planet ids are whole ints or integer strings; floats and bools are rejected."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def send_spacecraft_to_planet(storage: LocalStorage, spacecraft_id: str, target_planet_id: Any) -> Dict[str, Any]:
    target_id = parse_planet_id(target_planet_id)
    if target_id is None:
        raise DispatchError("Please select a destination planet.")

    with storage.transaction():
        planets = load_planets(storage)
        spacecrafts = load_spacecrafts(storage)
        outcome = dispatch_spacecraft(planets, spacecrafts, spacecraft_id, target_id)
        storage.set_json(SPACECRAFTS_KEY, spacecrafts)
        storage.set_json(PLANETS_KEY, planets)

    logging.info(
        "Dispatched spacecraft %s from planet %s to %s carrying %d people",
        outcome.spacecraft_id,
        outcome.from_planet_id,
        outcome.to_planet_id,
        outcome.transferred,
    )
    return outcome.to_dict()
