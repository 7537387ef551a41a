"""Region lookup endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...schemas.vendors import RegionResponse
from ...services.regions import classify_region
from ..dependencies import enforce_rate_limit

router = APIRouter(prefix="/regions", tags=["regions"], dependencies=[Depends(enforce_rate_limit)])


@router.get("/classify", response_model=RegionResponse)
def classify(
    postcode: str | None = Query(default=None, description="Five-digit postcode"),
    lat: float | None = Query(default=None, ge=-90, le=90),
    lng: float | None = Query(default=None, ge=-180, le=180),
) -> RegionResponse:
    if (lat is None) != (lng is None):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="lat and lng must be provided together")
    coordinates = (lat, lng) if lat is not None else None
    region = classify_region(postcode, coordinates)
    return RegionResponse(region=region.value, postcode=postcode, latitude=lat, longitude=lng)
