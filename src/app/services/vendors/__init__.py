"""Vendor selection services."""

from .matcher import (
    MatchRule,
    VendorMatch,
    find_nearest_vendor_by_postcode,
    find_optimal_vendor,
    match_vendor,
    vendors_by_area,
)

__all__ = [
    "MatchRule",
    "VendorMatch",
    "find_nearest_vendor_by_postcode",
    "find_optimal_vendor",
    "match_vendor",
    "vendors_by_area",
]
