"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, box

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """Haversine distance between two (lat, lng) pairs."""

    return haversine_km(origin[0], origin[1], destination[0], destination[1])


def point_in_bounds(
    lat: float,
    lon: float,
    lat_min: float,
    lat_max: float,
    lon_min: float,
    lon_max: float,
) -> bool:
    """Return True if the point lies inside or on the edge of the lat/lon box."""

    return box(lon_min, lat_min, lon_max, lat_max).covers(Point(lon, lat))
