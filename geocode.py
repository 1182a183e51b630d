"""
Free-text place search: gazetteer first, then OpenStreetMap Nominatim.

Run as a script to geocode a list of building names into a places CSV:

    python geocode.py "Biblioteca" "Bloco A" > places_auto.csv
"""

import os
import sys
import logging
import time
from typing import Optional

import pandas as pd
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from errors import ServiceUnavailableError
from places import Coordinate, Gazetteer, NotFound

logger = logging.getLogger(__name__)

AREA = os.environ.get("CAMPUSROUTE_AREA", "UniBH Belo Horizonte")
USER_AGENT = os.environ.get("CAMPUSROUTE_USER_AGENT", "unibh_campus_route")

_geolocator = None


def get_geolocator():
    global _geolocator
    if _geolocator is None:
        _geolocator = Nominatim(user_agent=USER_AGENT)
    return _geolocator


def search_place(query: str, geolocator=None) -> Optional[Coordinate]:
    """
    Look `query` up on Nominatim, scoped to the campus by appending AREA.

    Returns the best match or None when the service finds nothing. One request,
    no retry; any geocoder failure is raised as ServiceUnavailableError.
    """
    geolocator = geolocator or get_geolocator()
    scoped = f"{query} {AREA}"
    try:
        location = geolocator.geocode(scoped, exactly_one=True)
    except GeopyError as e:
        logger.error("Geocoding %r failed: %s", scoped, e)
        raise ServiceUnavailableError(f"Geocoding failed: {e}") from e

    if location is None:
        return None
    try:
        return Coordinate(float(location.latitude), float(location.longitude))
    except (AttributeError, TypeError, ValueError) as e:
        raise ServiceUnavailableError(f"Malformed geocoder response for {scoped!r}") from e


def locate_place(name: str, gazetteer: Gazetteer, geolocator=None) -> Optional[Coordinate]:
    """Resolve `name` against the gazetteer, falling back to search_place()."""
    found = gazetteer.resolve(name)
    if not isinstance(found, NotFound):
        return found
    logger.info("%r not in gazetteer, asking the geocoder", name)
    return search_place(name, geolocator=geolocator)


def main(argv=None):
    names = argv if argv is not None else sys.argv[1:]
    results = []
    for name in names:
        try:
            coord = search_place(name)
        except ServiceUnavailableError as e:
            print(f"Error: {name}: {e}", file=sys.stderr)
            coord = None
        if coord:
            print(f"{name}: {coord.lat}, {coord.lng}", file=sys.stderr)
            results.append([name, coord.lat, coord.lng])
        else:
            print(f"Not found: {name}", file=sys.stderr)
        time.sleep(1)  # Nominatim usage policy: max 1 request/second

    pd.DataFrame(results, columns=["label", "lat", "lon"]).to_csv(sys.stdout, index=False)


if __name__ == "__main__":
    main()
