"""Greedy nearest-neighbour visit ordering.

Every stop must already carry valid coordinates; callers filter out the rest.
The result is stable for identical input ordering: ties keep the stop that
appears first in the remaining list.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..geospatial import distance_km
from .models import RouteStop, SequencedStop

logger = logging.getLogger(__name__)


def sequence_route(start: tuple[float, float], stops: Sequence[RouteStop]) -> list[SequencedStop]:
    """Order stops by repeatedly visiting the nearest unvisited one."""

    remaining = list(stops)
    route: list[SequencedStop] = []
    current = start
    cumulative = 0.0

    while remaining:
        nearest_index = 0
        nearest_distance = distance_km(current, remaining[0].location)
        for index in range(1, len(remaining)):
            distance = distance_km(current, remaining[index].location)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index

        stop = remaining.pop(nearest_index)
        cumulative += nearest_distance
        route.append(
            SequencedStop(
                stop=stop,
                sequence=len(route) + 1,
                leg_km=nearest_distance,
                cumulative_km=cumulative,
            )
        )
        current = stop.location

    logger.debug("Sequenced %d stops, %.2f km total", len(route), cumulative)
    return route


def route_length_km(start: tuple[float, float], stops: Sequence[RouteStop]) -> float:
    """Total length when visiting stops in the given order."""

    total = 0.0
    current = start
    for stop in stops:
        total += distance_km(current, stop.location)
        current = stop.location
    return total
