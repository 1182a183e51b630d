import math

import pytest

from errors import InternalError, NotFoundError
from places import Coordinate
from routing import MAX_ARC_HEIGHT, STEPS, arc_offset, compute_route, generate_route, lerp

ORIGIN = Coordinate(-19.971, -43.963)
DESTINATION = Coordinate(-19.972, -43.964)


def test_route_has_fixed_length():
    assert len(generate_route(ORIGIN, DESTINATION)) == STEPS + 1 == 21
    far = generate_route((0.0, 0.0), (10.0, 10.0))
    assert len(far) == 21


@pytest.mark.parametrize(
    "origin, destination",
    [
        (ORIGIN, DESTINATION),
        ((0.0, 0.0), (1.0, 1.0)),
        ((0.1, 0.7), (-0.3, 0.2)),
        ((-19.9716538355151, -43.96324375462156), (-19.972541764414082, -43.962061590405)),
    ],
)
def test_endpoints_are_exact(origin, destination):
    points = generate_route(origin, destination)
    assert points[0] == tuple(origin)
    assert points[STEPS] == tuple(destination)


def test_arc_offset_shape():
    assert arc_offset(0.0) == 0.0
    assert arc_offset(1.0) == 0.0
    assert arc_offset(0.5) == pytest.approx(MAX_ARC_HEIGHT)
    assert arc_offset(0.25) == pytest.approx(arc_offset(0.75))
    assert max(arc_offset(i / STEPS) for i in range(STEPS + 1)) == arc_offset(0.5)


def test_midpoint_is_raised_by_max_arc_height():
    points = generate_route(ORIGIN, DESTINATION)
    mid = points[STEPS // 2]
    assert mid.lat - lerp(ORIGIN.lat, DESTINATION.lat, 0.5) == pytest.approx(MAX_ARC_HEIGHT, abs=1e-12)
    assert mid.lng == pytest.approx((ORIGIN.lng + DESTINATION.lng) / 2)


def test_points_follow_sine_arc():
    points = generate_route(ORIGIN, DESTINATION)
    for i, (lat, lng) in enumerate(points):
        t = i / STEPS
        expected_lat = ORIGIN.lat + t * (DESTINATION.lat - ORIGIN.lat) + MAX_ARC_HEIGHT * math.sin(math.pi * t)
        assert lat == pytest.approx(expected_lat, abs=1e-12)
        assert lng == pytest.approx(ORIGIN.lng + t * (DESTINATION.lng - ORIGIN.lng), abs=1e-12)


def test_zero_length_route_repeats_the_point():
    points = generate_route(ORIGIN, ORIGIN)
    assert points == [ORIGIN] * 21


def test_generate_route_is_deterministic():
    assert generate_route(ORIGIN, DESTINATION) == generate_route(ORIGIN, DESTINATION)


def test_generate_route_rejects_zero_steps():
    with pytest.raises(ValueError):
        generate_route(ORIGIN, DESTINATION, steps=0)


def test_compute_route_matches_case_and_accents(gazetteer):
    route = compute_route("raizes 1", "bloco a", gazetteer)
    assert route.origin == Coordinate(-19.971, -43.963)
    assert route.destination == Coordinate(-19.972, -43.964)
    assert len(route.points) == 21
    assert route.points[0] == route.origin
    assert route.points[-1] == route.destination


def test_compute_route_to_dict(gazetteer):
    data = compute_route("Raízes 1", "Bloco A", gazetteer).to_dict()
    assert data["origin"] == [-19.971, -43.963]
    assert data["destination"] == [-19.972, -43.964]
    assert data["points"][0] == [-19.971, -43.963]
    assert len(data["points"]) == 21


def test_compute_route_unknown_origin(gazetteer):
    with pytest.raises(NotFoundError) as exc:
        compute_route("raizes 9", "bloco a", gazetteer)
    assert exc.value.suggestions == {"origin": [], "destination": []}


def test_compute_route_suggests_for_failing_sides_only(gazetteer):
    with pytest.raises(NotFoundError) as exc:
        compute_route("Bloco A", "raizes", gazetteer)
    assert exc.value.suggestions == {"origin": [], "destination": ["Raízes 1", "Raízes 2"]}


def test_compute_route_both_sides_unknown(gazetteer):
    with pytest.raises(NotFoundError) as exc:
        compute_route("bloco", "ízes", gazetteer)
    assert exc.value.suggestions == {"origin": ["Bloco A"], "destination": ["Raízes 1", "Raízes 2"]}


@pytest.mark.parametrize("origin, destination", [(None, "Bloco A"), ("Bloco A", 42), (["Bloco A"], "Bloco A")])
def test_compute_route_malformed_input(gazetteer, origin, destination):
    with pytest.raises(InternalError):
        compute_route(origin, destination, gazetteer)


def test_compute_route_wraps_unexpected_failures():
    class BrokenGazetteer:
        def resolve(self, name):
            raise KeyError(name)

    with pytest.raises(InternalError, match="Resolution failed"):
        compute_route("a", "b", BrokenGazetteer())
