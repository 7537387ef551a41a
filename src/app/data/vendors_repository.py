"""Vendor loader: vendors table first, then the published sheet, then a local file.

Vendors are read fresh on every call; nothing here is cached.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Optional

import httpx
from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Vendor, VendorRole
from ..services.validation import is_valid_coordinates

logger = logging.getLogger(__name__)

LATITUDE_KEYS = ("latitude", "Latitude", "lat", "Lat")
LONGITUDE_KEYS = ("longitude", "Longitude", "lng", "Lng", "long", "Long")
RATE_KEYS = ("rate", "rate/kg", "ratePerKg", "rate_per_kg", "Rate")

# Legacy vendor sheets carry no role column; the role is implied by the vendor's name.
_ROLE_NAME_HINTS: tuple[tuple[str, VendorRole], ...] = (
    ("season", VendorRole.LANGKAWI_BULK),
    ("theresa", VendorRole.LANGKAWI_ITEM),
    ("ampang", VendorRole.KL_ITEM),
)

_COORDINATE_NOISE = re.compile(r"[^\d.\-]")
_LEADING_NUMBER = re.compile(r"^-?\d+\.?\d*")


def parse_coordinate(value: Any) -> Optional[float]:
    """Parse messy sheet values such as " 6.2030.1" into 6.2030."""

    if value is None or value == "":
        return None
    cleaned = _COORDINATE_NOISE.sub("", str(value).strip())
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def _parse_rate(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(str(value).replace("RM", "").strip())
    except ValueError:
        return 0.0


def _first_value(row: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(row: dict, key: str) -> str:
    value = row.get(key)
    if value is None:
        value = row.get(key.capitalize())
    return "" if value is None else str(value).strip()


def infer_vendor_role(name: str) -> VendorRole:
    lowered = name.lower()
    for hint, role in _ROLE_NAME_HINTS:
        if hint in lowered:
            return role
    return VendorRole.GENERAL


def _resolve_role(row: dict, name: str) -> VendorRole:
    explicit = _text(row, "role")
    if explicit:
        try:
            return VendorRole(explicit.lower())
        except ValueError:
            logger.warning(f"Vendor {name}: unknown role '{explicit}', inferring from name")
    return infer_vendor_role(name)


def vendor_from_row(row: dict) -> Optional[Vendor]:
    """Map a tabular vendor row to a Vendor; rows without a name yield None."""

    name = _text(row, "name")
    if not name:
        return None

    lat = parse_coordinate(_first_value(row, LATITUDE_KEYS))
    lng = parse_coordinate(_first_value(row, LONGITUDE_KEYS))
    if lat is not None and lng is not None and not is_valid_coordinates(lat, lng):
        logger.warning(f"Vendor {name}: invalid coordinate range {lat}, {lng}")
        lat = lng = None
    elif lat is None or lng is None:
        lat = lng = None

    return Vendor(
        name=name,
        area=_text(row, "area"),
        service=_text(row, "service"),
        rate_per_kg=_parse_rate(_first_value(row, RATE_KEYS)),
        phone=_text(row, "phone"),
        postcode=_text(row, "postcode"),
        latitude=lat,
        longitude=lng,
        role=_resolve_role(row, name),
    )


def vendors_from_rows(rows: Iterable[dict]) -> list[Vendor]:
    vendors = [vendor for vendor in (vendor_from_row(row) for row in rows) if vendor is not None]
    with_coordinates = sum(1 for vendor in vendors if vendor.coordinates is not None)
    logger.info(f"Processed {len(vendors)} vendors ({with_coordinates} with GPS coordinates)")
    return vendors


def parse_vendor_csv(text: str) -> list[Vendor]:
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    return vendors_from_rows(row for row in reader if any(isinstance(value, str) and value.strip() for value in row.values()))


def _load_vendors_from_database() -> list[Vendor] | None:
    """Load vendors from Supabase. Returns None if database not available or empty."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = supabase.table(settings.vendors_table).select("*").execute()
    except Exception as e:
        logger.debug(f"Vendor table query failed, falling back to sheet: {e}")
        return None
    if not response.data:
        return None
    return vendors_from_rows(response.data) or None


def _load_vendors_from_sheet(url: str | None = None) -> list[Vendor] | None:
    """Download the published vendor sheet as CSV."""
    sheet_url = url or settings.vendor_sheet_url
    if not sheet_url:
        return None

    try:
        with httpx.Client(timeout=settings.http_timeout_seconds) as client:
            response = client.get(
                sheet_url,
                headers={"Cache-Control": "no-cache, no-store, must-revalidate", "Pragma": "no-cache"},
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch vendor sheet: {e}")
        return None
    return parse_vendor_csv(response.text) or None


def _load_vendors_from_file(source: Path | None = None) -> list[Vendor] | None:
    """Load vendors from a local CSV or Excel file."""
    path = source or settings.vendor_file
    if path is None:
        return None
    if not path.exists():
        raise FileNotFoundError(f"Vendor file not found: {path}")

    if path.suffix.lower() in {".xlsx", ".xlsm"}:
        wb = load_workbook(path, data_only=True, read_only=True)
        sheet = wb.active
        rows = sheet.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError(f"Vendor workbook '{path}' is empty.")
        names = [str(cell).strip() if cell is not None else "" for cell in header]
        return vendors_from_rows(dict(zip(names, row)) for row in rows)

    return parse_vendor_csv(path.read_text(encoding="utf-8-sig"))


def load_vendors() -> list[Vendor]:
    """Get vendors from the first source that yields any."""

    for loader in (_load_vendors_from_database, _load_vendors_from_sheet, _load_vendors_from_file):
        vendors = loader()
        if vendors:
            return vendors
    logger.warning("No vendor source returned any vendors")
    return []
