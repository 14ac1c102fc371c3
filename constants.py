"""
Canonical shared constants for the Space Travel fleet service.

Storage keys, seed data and defaults used by fleet_service, the mock API
and the state layer.
"""

from typing import Any, Dict, List

# ---------------------------------------------------------------------------
# Local storage keys
# ---------------------------------------------------------------------------

PLANETS_KEY = "planets"
SPACECRAFTS_KEY = "spacecrafts"

# ---------------------------------------------------------------------------
# Spacecraft defaults
# ---------------------------------------------------------------------------

SPACECRAFT_ID_PREFIX = "sc-"
DEFAULT_HOME_PLANET_ID = 1
DEFAULT_SPACECRAFT_PICTURE_URL = "https://images.unsplash.com/photo-1446776877081-d282a0f896e2?w=400"

SPACECRAFT_ICONS: List[str] = [
    "/images/icon1.png",
    "/images/icon2.png",
    "/images/icon3.png",
]

UNKNOWN_PLANET_NAME = "Unknown"

# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

SEED_PLANETS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Earth",
        "currentPopulation": 7_800_000_000,
        "pictureUrl": "https://images.unsplash.com/photo-1614730321146-b6fa6a46bcb4?w=400",
    },
    {
        "id": 2,
        "name": "Mars",
        "currentPopulation": 0,
        "pictureUrl": "https://images.unsplash.com/photo-1614732414444-096e5f1122d5?w=400",
    },
    {
        "id": 3,
        "name": "Jupiter",
        "currentPopulation": 0,
        "pictureUrl": "https://images.unsplash.com/photo-1614732484003-ef9881555dc3?w=400",
    },
    {
        "id": 4,
        "name": "Saturn",
        "currentPopulation": 0,
        "pictureUrl": "https://images.unsplash.com/photo-1614732414444-096e5f1122d5?w=400",
    },
]

SEED_SPACECRAFTS: List[Dict[str, Any]] = [
    {
        "id": "sc-1",
        "name": "Odyssey",
        "capacity": 1_000_000,
        "description": "A massive colony ship designed for long-distance travel",
        "pictureUrl": "https://images.unsplash.com/photo-1446776877081-d282a0f896e2?w=400",
        "currentLocation": 1,
    },
    {
        "id": "sc-2",
        "name": "Pioneer",
        "capacity": 500_000,
        "description": "Fast and efficient transport vessel",
        "pictureUrl": "https://images.unsplash.com/photo-1446776653964-20c1d3a81b06?w=400",
        "currentLocation": 1,
    },
]
