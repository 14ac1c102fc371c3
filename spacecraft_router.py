"""
Spacecraft API routes.

Handles:
  /api/spacecrafts
  /api/spacecrafts/{spacecraft_id}
  /api/spacecrafts/{spacecraft_id}/dispatch
"""

import sqlite3
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from db import get_db
from dispatch_service import SpaceTravelError
import fleet_service
from local_storage import LocalStorage

router = APIRouter(tags=["spacecrafts"])


def _http_error(exc: SpaceTravelError) -> HTTPException:
    if isinstance(exc, fleet_service.SpacecraftValidationError):
        return HTTPException(
            status_code=exc.status_code,
            detail={"error": str(exc), "fieldErrors": exc.field_errors},
        )
    return HTTPException(status_code=exc.status_code, detail=str(exc))


# ── Pydantic models ────────────────────────────────────────

class BuildSpacecraftReq(BaseModel):
    name: Optional[str] = None
    capacity: Optional[Any] = None
    description: Optional[str] = None
    pictureUrl: Optional[str] = None
    currentLocation: Optional[int] = None


class DispatchReq(BaseModel):
    targetPlanetId: Optional[int] = None


# ── Routes ─────────────────────────────────────────────────

@router.get("/api/spacecrafts")
def api_spacecrafts(conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    return {"isError": False, "data": fleet_service.get_spacecrafts(LocalStorage(conn))}


@router.get("/api/spacecrafts/{spacecraft_id}")
def api_spacecraft_detail(spacecraft_id: str, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    try:
        spacecraft = fleet_service.get_spacecraft_by_id(LocalStorage(conn), spacecraft_id)
    except SpaceTravelError as exc:
        raise _http_error(exc)
    return {"isError": False, "data": spacecraft}


@router.post("/api/spacecrafts")
def api_build_spacecraft(req: BuildSpacecraftReq, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    try:
        spacecraft = fleet_service.build_spacecraft(LocalStorage(conn), req.model_dump())
    except SpaceTravelError as exc:
        raise _http_error(exc)
    return {"isError": False, "data": spacecraft}


@router.delete("/api/spacecrafts/{spacecraft_id}")
def api_destroy_spacecraft(spacecraft_id: str, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    sid = (spacecraft_id or "").strip()
    if not sid:
        raise HTTPException(status_code=400, detail="spacecraft_id is required")

    try:
        removed = fleet_service.destroy_spacecraft_by_id(LocalStorage(conn), sid)
    except SpaceTravelError as exc:
        raise _http_error(exc)
    return {"isError": False, "data": removed}


@router.post("/api/spacecrafts/{spacecraft_id}/dispatch")
def api_dispatch_spacecraft(spacecraft_id: str, req: DispatchReq, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    try:
        outcome = fleet_service.send_spacecraft_to_planet(LocalStorage(conn), spacecraft_id, req.targetPlanetId)
    except SpaceTravelError as exc:
        raise _http_error(exc)
    return {"isError": False, "data": outcome}
