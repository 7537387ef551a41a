"""Input validation and sanitisation helpers."""

from __future__ import annotations

import re

from ..models.domain import OrderStatus

_POSTCODE = re.compile(r"^\d{5}$")
_POSTCODE_IN_ADDRESS = re.compile(r"\b\d{5}\b")
_UNSAFE_CHARS = re.compile(r"[<>\"'&\x00-\x1f\x7f-\x9f]")
_UNSAFE_PROTOCOLS = re.compile(r"(javascript|data|vbscript):", re.IGNORECASE)
_PHONE_DISALLOWED = re.compile(r"[^\d\s+\-()]")

VALID_STATUSES = frozenset(status.value for status in OrderStatus)


def is_valid_order_status(status: str | None) -> bool:
    return bool(status) and status.strip().lower() in VALID_STATUSES


def is_valid_postcode(postcode: str | None) -> bool:
    """Malaysian postcodes are exactly five digits."""
    return bool(postcode) and _POSTCODE.match(postcode) is not None


def is_valid_coordinates(lat: float, lng: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lng <= 180


def extract_postcode(address: str | None) -> str:
    """First standalone five-digit group in an address, or an empty string."""

    if not address:
        return ""
    match = _POSTCODE_IN_ADDRESS.search(address)
    return match.group(0) if match else ""


def sanitize_string(value: str) -> str:
    if not isinstance(value, str):
        raise TypeError("Input must be a string")
    cleaned = _UNSAFE_CHARS.sub("", value)
    cleaned = _UNSAFE_PROTOCOLS.sub("", cleaned)
    return cleaned.strip()


def sanitize_phone_number(phone: str) -> str:
    if not isinstance(phone, str):
        raise TypeError("Phone must be a string")
    return _PHONE_DISALLOWED.sub("", phone).strip()
