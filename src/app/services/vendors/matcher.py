"""Vendor selection for pickup orders.

Rules are applied in strict priority order:

1. Langkawi postcodes: bulk (kg / wash / fold) services go to the nearest
   ``langkawi_bulk`` vendor with known coordinates, everything else to the
   ``langkawi_item`` vendor.
2. KL postcodes: per-item services go to the ``kl_item`` vendor.
3. Nearest vendor by great-circle distance, when the customer has GPS.
4. Nearest vendor by numeric postcode difference.

A rule whose vendor is missing falls through to the next one.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ...models.domain import Coordinates, Vendor, VendorRole
from ..geospatial import distance_km
from ..regions import is_kl_postcode, is_langkawi_postcode

logger = logging.getLogger(__name__)

BULK_KEYWORDS = ("kg", "wash", "fold")
ITEM_KEYWORDS = ("shoe", "mattress", "dry", "clean")

_NON_DIGITS = re.compile(r"\D")


class MatchRule(str, Enum):
    LANGKAWI_BULK = "langkawi_bulk"
    LANGKAWI_ITEM = "langkawi_item"
    KL_ITEM = "kl_item"
    GPS_NEAREST = "gps_nearest"
    POSTCODE_NEAREST = "postcode_nearest"


@dataclass(slots=True)
class VendorMatch:
    vendor: Vendor
    rule: MatchRule
    distance_km: Optional[float] = None


def is_bulk_service(service_type: str) -> bool:
    text = (service_type or "").lower()
    return any(keyword in text for keyword in BULK_KEYWORDS)


def is_item_service(service_type: str) -> bool:
    """Per-item services: anything not sold by weight, plus shoe/mattress/dry-clean work."""

    text = (service_type or "").lower()
    return "kg" not in text or any(keyword in text for keyword in ITEM_KEYWORDS)


def parse_postcode_number(postcode: str | None) -> Optional[int]:
    digits = _NON_DIGITS.sub("", postcode or "")
    if not digits:
        return None
    return int(digits)


def find_nearest_vendor_by_postcode(customer_postcode: str, vendors: Sequence[Vendor]) -> Optional[Vendor]:
    """Pick the vendor whose numeric postcode is closest to the customer's."""

    if not customer_postcode or not vendors:
        return None
    customer_code = parse_postcode_number(customer_postcode)
    if customer_code is None:
        return None

    nearest = vendors[0]
    first_code = parse_postcode_number(nearest.postcode)
    min_difference = abs(first_code - customer_code) if first_code is not None else float("inf")
    for vendor in vendors:
        vendor_code = parse_postcode_number(vendor.postcode)
        if vendor_code is None:
            continue
        difference = abs(vendor_code - customer_code)
        if difference < min_difference:
            min_difference = difference
            nearest = vendor
    return nearest


def _nearest_by_distance(origin: Coordinates, vendors: Sequence[Vendor]) -> Optional[tuple[Vendor, float]]:
    best: Optional[tuple[Vendor, float]] = None
    for vendor in vendors:
        coordinates = vendor.coordinates
        if coordinates is None:
            continue
        distance = distance_km(origin, coordinates)
        if best is None or distance < best[1]:
            best = (vendor, distance)
    return best


def _first_with_role(vendors: Sequence[Vendor], role: VendorRole) -> Optional[Vendor]:
    return next((vendor for vendor in vendors if vendor.role == role), None)


def _match_langkawi(
    customer_coordinates: Coordinates | None,
    service_type: str,
    vendors: Sequence[Vendor],
) -> Optional[VendorMatch]:
    if is_bulk_service(service_type):
        # Only bulk vendors with a known location are eligible, even without customer GPS.
        bulk_vendors = [
            vendor
            for vendor in vendors
            if vendor.role == VendorRole.LANGKAWI_BULK and vendor.coordinates is not None
        ]
        if not bulk_vendors:
            return None
        if customer_coordinates is not None:
            nearest = _nearest_by_distance(customer_coordinates, bulk_vendors)
            if nearest is not None:
                return VendorMatch(nearest[0], MatchRule.LANGKAWI_BULK, nearest[1])
        return VendorMatch(bulk_vendors[0], MatchRule.LANGKAWI_BULK)

    item_vendor = _first_with_role(vendors, VendorRole.LANGKAWI_ITEM)
    if item_vendor is None:
        return None
    return VendorMatch(item_vendor, MatchRule.LANGKAWI_ITEM)


def match_vendor(
    customer_postcode: str,
    customer_coordinates: Coordinates | None,
    service_type: str,
    vendors: Sequence[Vendor],
) -> Optional[VendorMatch]:
    """Select a vendor for a customer and report which rule made the choice."""

    if not vendors:
        return None
    customer_postcode = (customer_postcode or "").strip()
    logger.info("Finding vendor for service %r, postcode %r", service_type, customer_postcode)

    if is_langkawi_postcode(customer_postcode):
        match = _match_langkawi(customer_coordinates, service_type, vendors)
        if match is not None:
            return match

    if is_kl_postcode(customer_postcode) and is_item_service(service_type):
        kl_vendor = _first_with_role(vendors, VendorRole.KL_ITEM)
        if kl_vendor is not None:
            return VendorMatch(kl_vendor, MatchRule.KL_ITEM)

    if customer_coordinates is not None:
        nearest = _nearest_by_distance(customer_coordinates, vendors)
        if nearest is not None:
            return VendorMatch(nearest[0], MatchRule.GPS_NEAREST, nearest[1])

    vendor = find_nearest_vendor_by_postcode(customer_postcode, vendors)
    if vendor is None:
        return None
    return VendorMatch(vendor, MatchRule.POSTCODE_NEAREST)


def find_optimal_vendor(
    customer_postcode: str,
    customer_coordinates: Coordinates | None,
    service_type: str,
    vendors: Sequence[Vendor],
) -> Optional[Vendor]:
    match = match_vendor(customer_postcode, customer_coordinates, service_type, vendors)
    return match.vendor if match else None


def vendors_by_area(vendors: Sequence[Vendor], area: str) -> list[Vendor]:
    wanted = area.strip().lower()
    return [vendor for vendor in vendors if vendor.area.strip().lower() == wanted]
