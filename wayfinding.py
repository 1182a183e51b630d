#!/usr/bin/env python3
"""Command-line campus route: pick two places, print the arc, save route_map.html."""

import os
import logging
import sys

from errors import CampusRouteError, NotFoundError
from places import load_places
from route_map import save_map
from routing import compute_route

OUTPUT_HTML = "route_map.html"


def pick_place(prompt, labels):
    """Accept a list number or a typed place name."""
    while True:
        answer = input(prompt).strip()
        if not answer:
            print("Please enter a number or a place name.")
            continue
        if answer.isdigit():
            n = int(answer)
            if 1 <= n <= len(labels):
                return labels[n - 1]
            print(f"Please enter a number between 1 and {len(labels)}.")
            continue
        return answer


def main():
    logging.basicConfig(level=os.environ.get("CAMPUSROUTE_LOG_LEVEL", "WARNING").upper())
    places = load_places()
    labels = places.names

    print("Available places:")
    for i, label in enumerate(labels, 1):
        print(f" {i}: {label}")

    origin = pick_place("\nOrigin (number or name): ", labels)
    destination = pick_place("Destination (number or name): ", labels)

    try:
        route = compute_route(origin, destination, places)
    except NotFoundError as e:
        print(f"\nPlace not found: {origin} → {destination}")
        for side in ("origin", "destination"):
            if e.suggestions[side]:
                print(f" {side} suggestions: {', '.join(e.suggestions[side])}")
        return 1
    except CampusRouteError as e:
        print(f"\nError: {e}")
        return 1

    print(f"\nRoute from {origin} to {destination}:")
    for lat, lng in route.points:
        print(f" - {lat:.6f}, {lng:.6f}")

    save_map(OUTPUT_HTML, gazetteer=places, route=route)
    print(f"\nInteractive map saved as {OUTPUT_HTML}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
