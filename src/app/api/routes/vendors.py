"""Vendor endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...data.vendors_repository import load_vendors
from ...schemas.vendors import VendorMatchRequest, VendorMatchResponse, VendorModel, VendorsResponse
from ...services.regions import classify_region
from ...services.vendors import match_vendor, vendors_by_area
from ..dependencies import enforce_rate_limit

router = APIRouter(prefix="/vendors", tags=["vendors"], dependencies=[Depends(enforce_rate_limit)])


@router.get("", response_model=VendorsResponse)
def list_vendors(area: str | None = Query(default=None, description="Only vendors serving this area")) -> VendorsResponse:
    vendors = load_vendors()
    if area:
        vendors = vendors_by_area(vendors, area)
    return VendorsResponse(vendors=[VendorModel.from_vendor(vendor) for vendor in vendors])


@router.post("/match", response_model=VendorMatchResponse)
def preview_match(payload: VendorMatchRequest) -> VendorMatchResponse:
    if (payload.latitude is None) != (payload.longitude is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="latitude and longitude must be provided together",
        )
    coordinates = (payload.latitude, payload.longitude) if payload.latitude is not None else None
    region = classify_region(payload.postcode, coordinates)

    match = match_vendor(payload.postcode, coordinates, payload.service_type, load_vendors())
    if match is None:
        return VendorMatchResponse(matched=False, region=region.value)
    return VendorMatchResponse(
        matched=True,
        vendor=VendorModel.from_vendor(match.vendor),
        rule=match.rule.value,
        distance_km=match.distance_km,
        region=region.value,
    )
