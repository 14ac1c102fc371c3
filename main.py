from typing import Any, Dict

from fastapi import FastAPI

from db import connect_db
from db_migrations import apply_migrations
import fleet_service
from local_storage import LocalStorage
from planet_router import router as planet_router
from spacecraft_router import router as spacecraft_router

app = FastAPI(title="Space Travel")
app.include_router(planet_router)
app.include_router(spacecraft_router)


@app.on_event("startup")
def _startup():
    conn = connect_db()
    try:
        apply_migrations(conn)
        fleet_service.initialize_data(LocalStorage(conn))
    finally:
        conn.close()


@app.get("/api/health")
def api_health() -> Dict[str, Any]:
    conn = connect_db()
    try:
        conn.execute("SELECT 1")
    finally:
        conn.close()
    return {
        "ok": True,
        "service": "space-travel",
    }


@app.post("/api/admin/reset")
def api_admin_reset() -> Dict[str, Any]:
    conn = connect_db()
    try:
        storage = LocalStorage(conn)
        fleet_service.reset_data(storage)
        planets = fleet_service.get_planets(storage)
        spacecrafts = fleet_service.get_spacecrafts(storage)
    finally:
        conn.close()

    return {
        "ok": True,
        "planets": len(planets),
        "spacecrafts": len(spacecrafts),
    }
