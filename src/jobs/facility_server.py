"""HTTP entrypoint serving nearby healthcare facility lookups."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from src.core.config import get_settings
from src.core.errors import FacilityFinderError
from src.core.orchestrator import DEFAULT_SEARCH_FAILURE_MESSAGE, RequestOrchestrator, build_query

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App & orchestrator ----------
app = Flask(__name__)
_orchestrator: Optional[RequestOrchestrator] = None


def get_orchestrator() -> RequestOrchestrator:
    """Build the shared orchestrator once per process."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = RequestOrchestrator.from_settings(get_settings())
        logger.info("Facility orchestrator initialised")
    return _orchestrator


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; does not touch the upstream services."""
    return (
        jsonify(
            {
                "status": "ok",
                "revision": os.getenv("K_REVISION", "unknown"),
                "region": os.getenv("X_GOOGLE_RUNTIMEREGION", "unknown"),
            }
        ),
        200,
    )


@app.route("/api/nearby-facilities", methods=["GET", "POST"])
def nearby_facilities() -> Any:
    """
    Find healthcare facilities near an address or a coordinate pair.
    Accepts query params (GET) or a JSON body (POST) with either
    `address` (alias `location`) or `latitude` + `longitude`.
    """
    payload: Dict[str, Any] = dict(request.args)
    if request.method == "POST":
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            return _error_response("Request body must be a JSON object.", 400)
        payload.update(body)

    address = payload.get("address") or payload.get("location")
    latitude = payload.get("latitude")
    longitude = payload.get("longitude")
    logger.info("Nearby facilities request: address=%r lat=%s lon=%s", address, latitude, longitude)

    try:
        query = build_query(address=address, latitude=latitude, longitude=longitude)
        result = get_orchestrator().handle(query)
    except FacilityFinderError as exc:
        return _error_response(exc.message, exc.status_code, exc.error)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Nearby facilities lookup failed: %s", exc)
        return _error_response(DEFAULT_SEARCH_FAILURE_MESSAGE, 500, str(exc))

    return jsonify(result.to_dict()), 200


# ---------- Internals ----------


def _error_response(message: str, status_code: int, error: Optional[str] = None) -> Any:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    return jsonify(body), status_code


def main() -> None:
    port = get_settings().worker_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
