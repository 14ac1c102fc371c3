"""
HTTP client for the Space Travel service.

Exposes the same surface and result shapes as SpaceTravelMockApi so the
state layer can run against either one.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests

from space_travel_api import error_result, ok_result

SPACE_TRAVEL_API_URL = os.environ.get("SPACE_TRAVEL_API_URL", "http://127.0.0.1:8000")
SPACE_TRAVEL_HTTP_TIMEOUT_S = float(os.environ.get("SPACE_TRAVEL_HTTP_TIMEOUT_S", "10"))

logger = logging.getLogger(__name__)


class SpaceTravelHttpApi:
    """Client for the /api/planets and /api/spacecrafts routes."""

    def __init__(self, base_url: Optional[str] = None, session: Any = None, timeout_s: float = SPACE_TRAVEL_HTTP_TIMEOUT_S):
        """
        Args:
            base_url: Service root, e.g. ``http://127.0.0.1:8000``
            session: Object with ``get``/``post``/``delete`` methods; a
                ``requests.Session`` by default
            timeout_s: Per-request timeout in seconds
        """
        self.base_url = (base_url or SPACE_TRAVEL_API_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout_s = timeout_s

    def _request(self, method: str, path: str, json_body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": self.timeout_s}
        if json_body is not None:
            kwargs["json"] = json_body
        try:
            response = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as exc:
            logger.error(f"Space Travel request failed: {method.upper()} {path}: {exc}")
            return error_result(f"Request failed: {exc}")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            detail = payload.get("detail") if isinstance(payload, dict) else None
            if isinstance(detail, dict):
                return error_result(str(detail.get("error") or "Request failed"), fieldErrors=detail.get("fieldErrors") or {})
            if isinstance(detail, list):
                return error_result("; ".join(str(d.get("msg") or d) for d in detail if isinstance(d, dict)) or "Invalid request")
            return error_result(str(detail or f"HTTP {response.status_code}"))

        if not isinstance(payload, dict):
            return error_result("Malformed response")
        return ok_result(payload.get("data"))

    def get_planets(self) -> Dict[str, Any]:
        return self._request("get", "/api/planets")

    def get_spacecrafts(self) -> Dict[str, Any]:
        return self._request("get", "/api/spacecrafts")

    def get_spacecraft_by_id(self, spacecraft_id: str) -> Dict[str, Any]:
        return self._request("get", f"/api/spacecrafts/{spacecraft_id}")

    def build_spacecraft(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("post", "/api/spacecrafts", json_body=dict(data))

    def destroy_spacecraft_by_id(self, spacecraft_id: str) -> Dict[str, Any]:
        return self._request("delete", f"/api/spacecrafts/{spacecraft_id}")

    def send_spacecraft_to_planet(self, spacecraft_id: str, target_planet_id: Any) -> Dict[str, Any]:
        return self._request(
            "post",
            f"/api/spacecrafts/{spacecraft_id}/dispatch",
            json_body={"targetPlanetId": target_planet_id},
        )
