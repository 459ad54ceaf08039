"""CLI job to look up healthcare facilities near a location."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from src.core.errors import FacilityFinderError
from src.core.orchestrator import RequestOrchestrator, build_query

logger = logging.getLogger(__name__)


def find_nearby(
    *,
    address: Optional[str],
    latitude: Optional[float],
    longitude: Optional[float],
    orchestrator: Optional[RequestOrchestrator] = None,
) -> dict:
    query = build_query(address=address, latitude=latitude, longitude=longitude)
    orchestrator = orchestrator or RequestOrchestrator.from_settings()
    result = orchestrator.handle(query)
    logger.info("Found %d facilities near %s", len(result.facilities), result.location_label)
    return result.to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find healthcare facilities near a location")
    parser.add_argument("--address", dest="address", help="Free-text address to geocode")
    parser.add_argument("--lat", dest="latitude", type=float, help="Latitude in decimal degrees")
    parser.add_argument("--lon", dest="longitude", type=float, help="Longitude in decimal degrees")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        payload = find_nearby(address=args.address, latitude=args.latitude, longitude=args.longitude)
    except FacilityFinderError as exc:
        logger.error("Lookup failed (%d): %s", exc.status_code, exc.message)
        json.dump({"success": False, "message": exc.message}, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
        return 1 if exc.status_code >= 500 else 2

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
