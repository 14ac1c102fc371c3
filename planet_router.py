"""
Planet API routes.

Handles:
  /api/planets
  /api/planets/{planet_id}
"""

import sqlite3
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from db import get_db
from dispatch_service import find_planet
import fleet_service
from local_storage import LocalStorage

router = APIRouter(tags=["planets"])


@router.get("/api/planets")
def api_planets(conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    planets = fleet_service.get_planets(LocalStorage(conn))
    return {"isError": False, "data": planets}


@router.get("/api/planets/{planet_id}")
def api_planet_detail(planet_id: int, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    storage = LocalStorage(conn)
    planet = find_planet(fleet_service.get_planets(storage), planet_id)
    if not planet:
        raise HTTPException(status_code=404, detail="Planet not found")

    stationed = [
        s for s in fleet_service.get_spacecrafts(storage)
        if s.get("currentLocation") == planet_id
    ]
    return {"isError": False, "data": {**planet, "stationed": stationed}}
