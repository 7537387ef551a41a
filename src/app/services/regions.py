"""Service region classification from postcodes and coordinates.

Boxes are coarse and overlap (the Kuala Lumpur box sits inside Selangor's);
the first box that covers the point wins, in the order listed below.
"""

from __future__ import annotations

import re
from typing import Optional

from ..models.domain import Coordinates, Region
from .geospatial import point_in_bounds

LANGKAWI_POSTCODE_PREFIX = "07"
KL_POSTCODE_PATTERN = re.compile(r"^(5[0-9]|6[0-9]|4[0-9])")

# (region, lat_min, lat_max, lon_min, lon_max)
REGION_BOXES: tuple[tuple[Region, float, float, float, float], ...] = (
    (Region.LANGKAWI, 6.2, 6.5, 99.6, 100.0),
    (Region.KUALA_LUMPUR, 3.0, 3.3, 101.5, 101.8),
    (Region.SELANGOR, 3.0, 3.5, 101.3, 101.8),
    (Region.PENANG, 5.2, 5.6, 100.1, 100.5),
    (Region.JOHOR, 1.3, 1.7, 103.5, 104.0),
)
MALAYSIA_BOX = (1.0, 7.5, 99.0, 120.0)


def is_langkawi_postcode(postcode: str | None) -> bool:
    return bool(postcode) and postcode.strip().startswith(LANGKAWI_POSTCODE_PREFIX)


def is_kl_postcode(postcode: str | None) -> bool:
    return bool(postcode) and KL_POSTCODE_PATTERN.match(postcode.strip()) is not None


def classify_postcode(postcode: str | None) -> Optional[Region]:
    """Region implied by the postcode prefix, or None when the prefix says nothing."""

    if is_langkawi_postcode(postcode):
        return Region.LANGKAWI
    if is_kl_postcode(postcode):
        return Region.KUALA_LUMPUR
    return None


def classify_coordinates(coordinates: Coordinates | None) -> Region:
    if coordinates is None:
        return Region.UNKNOWN
    lat, lon = coordinates
    for region, lat_min, lat_max, lon_min, lon_max in REGION_BOXES:
        if point_in_bounds(lat, lon, lat_min, lat_max, lon_min, lon_max):
            return region
    if point_in_bounds(lat, lon, *MALAYSIA_BOX):
        return Region.MALAYSIA
    return Region.INTERNATIONAL


def classify_region(postcode: str | None = None, coordinates: Coordinates | None = None) -> Region:
    """Classify a location; a recognised postcode prefix wins over coordinates."""

    by_postcode = classify_postcode(postcode)
    if by_postcode is not None:
        return by_postcode
    return classify_coordinates(coordinates)
