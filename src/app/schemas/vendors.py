"""Vendor and region API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Vendor


class VendorModel(BaseModel):
    name: str
    area: str
    service: str
    rate_per_kg: float
    phone: str
    postcode: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    role: str

    @classmethod
    def from_vendor(cls, vendor: Vendor) -> "VendorModel":
        return cls(
            name=vendor.name,
            area=vendor.area,
            service=vendor.service,
            rate_per_kg=vendor.rate_per_kg,
            phone=vendor.phone,
            postcode=vendor.postcode,
            latitude=vendor.latitude,
            longitude=vendor.longitude,
            role=vendor.role.value,
        )


class VendorsResponse(BaseModel):
    vendors: List[VendorModel]


class VendorMatchRequest(BaseModel):
    postcode: str = ""
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    service_type: str = "standard"


class VendorMatchResponse(BaseModel):
    matched: bool
    vendor: Optional[VendorModel] = None
    rule: Optional[str] = None
    distance_km: Optional[float] = None
    region: str


class RegionResponse(BaseModel):
    region: str
    postcode: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
