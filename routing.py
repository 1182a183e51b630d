"""
Arched route between two campus places.

There is no walkway graph: a route is a straight interpolation between the
two coordinates with a small sine bump added to the latitude so it reads as
an arc on the map.
"""

import logging
import math
from typing import List, NamedTuple

from errors import InternalError, NotFoundError
from places import Coordinate, Gazetteer, NotFound

logger = logging.getLogger(__name__)

STEPS = 20
MAX_ARC_HEIGHT = 0.0002  # degrees latitude


class RouteResult(NamedTuple):
    points: List[Coordinate]
    origin: Coordinate
    destination: Coordinate

    def to_dict(self):
        return {
            "points": [list(p) for p in self.points],
            "origin": list(self.origin),
            "destination": list(self.destination),
        }


def lerp(a: float, b: float, t: float) -> float:
    # exact at t == 0 and t == 1
    return (1.0 - t) * a + t * b


def arc_offset(t: float, height: float = MAX_ARC_HEIGHT) -> float:
    """Sine bump over [0, 1]: zero at both ends, `height` at t = 0.5."""
    if t <= 0.0 or t >= 1.0:
        return 0.0
    return height * math.sin(math.pi * t)


def generate_route(origin, destination, steps: int = STEPS, height: float = MAX_ARC_HEIGHT) -> List[Coordinate]:
    """
    Return steps + 1 points from origin to destination along a shallow arc.

    The first and last points are the endpoints themselves. A zero-length
    segment yields steps + 1 copies of the origin.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")
    o, d = Coordinate(*origin), Coordinate(*destination)
    if o == d:
        return [o] * (steps + 1)

    points = []
    for i in range(steps + 1):
        t = i / steps
        lng = lerp(o.lng, d.lng, t)
        lat = lerp(o.lat, d.lat, t) + arc_offset(t, height)
        points.append(Coordinate(lat, lng))
    return points


def compute_route(origin_name: str, destination_name: str, gazetteer: Gazetteer) -> RouteResult:
    """
    Resolve both names and build the arched route between them.

    Raises NotFoundError (with suggestions for both sides) when either name
    does not resolve, InternalError on anything unexpected.
    """
    for label, value in (("origin", origin_name), ("destination", destination_name)):
        if not isinstance(value, str):
            raise InternalError(f"{label} must be a string, got {type(value).__name__}")

    try:
        origin = gazetteer.resolve(origin_name)
        destination = gazetteer.resolve(destination_name)
    except Exception as e:
        logger.exception("Resolving %r -> %r failed", origin_name, destination_name)
        raise InternalError(f"Resolution failed: {e}") from e

    if isinstance(origin, NotFound) or isinstance(destination, NotFound):
        suggestions = {
            "origin": origin.suggestions if isinstance(origin, NotFound) else [],
            "destination": destination.suggestions if isinstance(destination, NotFound) else [],
        }
        logger.info("Route %r -> %r: place not found", origin_name, destination_name)
        raise NotFoundError(suggestions)

    try:
        points = generate_route(origin, destination)
    except Exception as e:
        logger.exception("Route generation failed for %r -> %r", origin_name, destination_name)
        raise InternalError(f"Route generation failed: {e}") from e

    logger.info("Route %r -> %r: %d points", origin_name, destination_name, len(points))
    return RouteResult(points, origin, destination)
