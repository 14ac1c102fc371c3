"""
Population transfer for spacecraft dispatch.

Pure functions over the loaded planet and spacecraft lists. A dispatch
moves ``min(capacity, origin population)`` people from the spacecraft's
current planet to the target planet and relocates the spacecraft; the
total population across all planets never changes.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class SpaceTravelError(Exception):
    """Base error for fleet operations. ``status_code`` maps it onto HTTP."""

    status_code = 400


class SpacecraftNotFoundError(SpaceTravelError):
    status_code = 404

    def __init__(self, message: str = "Spacecraft not found"):
        super().__init__(message)


class PlanetNotFoundError(SpaceTravelError):
    status_code = 404

    def __init__(self, message: str = "Planet not found"):
        super().__init__(message)


class DispatchError(SpaceTravelError):
    status_code = 400


@dataclass(frozen=True)
class DispatchOutcome:
    spacecraft_id: str
    from_planet_id: int
    to_planet_id: int
    transferred: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spacecraftId": self.spacecraft_id,
            "fromPlanetId": self.from_planet_id,
            "toPlanetId": self.to_planet_id,
            "transferred": self.transferred,
        }


def compute_transfer_amount(capacity: int, population: int) -> int:
    return max(0, min(int(capacity), int(population)))


def total_population(planets: List[Dict[str, Any]]) -> int:
    return sum(int(p.get("currentPopulation") or 0) for p in planets)


def find_planet(planets: List[Dict[str, Any]], planet_id: Any) -> Optional[Dict[str, Any]]:
    for planet in planets:
        if planet.get("id") == planet_id:
            return planet
    return None


def find_spacecraft(spacecrafts: List[Dict[str, Any]], spacecraft_id: str) -> Optional[Dict[str, Any]]:
    for spacecraft in spacecrafts:
        if spacecraft.get("id") == spacecraft_id:
            return spacecraft
    return None


def dispatch_spacecraft(
    planets: List[Dict[str, Any]],
    spacecrafts: List[Dict[str, Any]],
    spacecraft_id: str,
    target_planet_id: int,
) -> DispatchOutcome:
    """Send a spacecraft to ``target_planet_id``, carrying population with it.

    Mutates the matching planet and spacecraft dicts in place. Nothing is
    touched when a check fails.

    Raises:
        SpacecraftNotFoundError: no spacecraft with ``spacecraft_id``.
        DispatchError: the target is the current location, the spacecraft is
            not stationed anywhere, or either planet does not exist.
    """
    spacecraft = find_spacecraft(spacecrafts, spacecraft_id)
    if spacecraft is None:
        raise SpacecraftNotFoundError()

    from_id = spacecraft.get("currentLocation")
    if from_id == target_planet_id:
        raise DispatchError("Target planet is the same as current location")
    if from_id is None:
        raise DispatchError("Spacecraft is not stationed on any planet")

    origin = find_planet(planets, from_id)
    if origin is None:
        raise DispatchError(f"Current planet {from_id} not found")
    target = find_planet(planets, target_planet_id)
    if target is None:
        raise DispatchError("Target planet not found")

    transferred = compute_transfer_amount(
        int(spacecraft.get("capacity") or 0),
        int(origin.get("currentPopulation") or 0),
    )

    origin["currentPopulation"] = int(origin.get("currentPopulation") or 0) - transferred
    target["currentPopulation"] = int(target.get("currentPopulation") or 0) + transferred
    spacecraft["currentLocation"] = target_planet_id

    return DispatchOutcome(
        spacecraft_id=spacecraft_id,
        from_planet_id=from_id,
        to_planet_id=target_planet_id,
        transferred=transferred,
    )
