import itertools

import pytest

from src.app.services.routing.models import RouteStop, StopKind
from src.app.services.routing.sequencer import route_length_km, sequence_route

START = (3.139, 101.6869)


def _stop(stop_id: str, lat: float, lng: float, kind: StopKind = StopKind.PICKUP) -> RouteStop:
    return RouteStop(stop_id=stop_id, name=stop_id, kind=kind, latitude=lat, longitude=lng)


STOPS = [
    _stop("far", 3.30, 101.80),
    _stop("near", 3.14, 101.69),
    _stop("mid", 3.20, 101.72),
    _stop("vendor", 3.16, 101.70, StopKind.DROPOFF),
]


def test_empty_stop_list_yields_empty_route():
    assert sequence_route(START, []) == []


def test_visits_nearest_stop_first():
    route = sequence_route(START, STOPS)

    assert [item.stop.stop_id for item in route] == ["near", "vendor", "mid", "far"]
    assert [item.sequence for item in route] == [1, 2, 3, 4]


def test_sequencing_is_deterministic():
    first = sequence_route(START, STOPS)
    second = sequence_route(START, STOPS)

    assert first == second


def test_cumulative_distance_adds_up_legs():
    route = sequence_route(START, STOPS)

    running = 0.0
    for item in route:
        running += item.leg_km
        assert item.cumulative_km == pytest.approx(running)
    assert route[-1].cumulative_km == pytest.approx(route_length_km(START, [item.stop for item in route]))


def test_ties_keep_first_listed_stop():
    start = (3.0, 101.0)
    east = _stop("east", 3.0, 101.5)
    west = _stop("west", 3.0, 100.5)

    route = sequence_route(start, [east, west])
    assert route[0].stop.stop_id == "east"

    route = sequence_route(start, [west, east])
    assert route[0].stop.stop_id == "west"


@pytest.mark.parametrize(
    "stops",
    [
        [_stop("a", 3.2, 101.7), _stop("b", 3.1, 101.6)],
        [_stop("a", 3.0, 101.5), _stop("b", 3.14, 101.69)],
        [_stop("a", 5.4, 100.3), _stop("b", 6.35, 99.8)],
    ],
)
def test_two_stop_route_is_never_longer_than_the_alternative(stops):
    route = sequence_route(START, stops)
    total = route[-1].cumulative_km

    for ordering in itertools.permutations(stops):
        assert total <= route_length_km(START, ordering) + 1e-9


def test_input_list_is_not_mutated():
    stops = list(STOPS)
    sequence_route(START, stops)

    assert stops == STOPS
