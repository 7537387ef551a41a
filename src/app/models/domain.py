"""Domain models for orders, vendors and regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

Coordinates = tuple[float, float]


class OrderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PICKED_UP = "picked-up"
    PROCESSING = "processing"
    AT_LAUNDRY = "at-laundry"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Region(str, Enum):
    LANGKAWI = "langkawi"
    KUALA_LUMPUR = "kuala_lumpur"
    SELANGOR = "selangor"
    PENANG = "penang"
    JOHOR = "johor"
    MALAYSIA = "malaysia"
    INTERNATIONAL = "international"
    UNKNOWN = "unknown"


class VendorRole(str, Enum):
    """Business rule identity of a vendor, fixed when the vendor is registered."""

    LANGKAWI_BULK = "langkawi_bulk"
    LANGKAWI_ITEM = "langkawi_item"
    KL_ITEM = "kl_item"
    GENERAL = "general"


@dataclass(slots=True)
class Vendor:
    """Represents a laundry vendor as read from the vendor feed."""

    name: str
    area: str = ""
    service: str = ""
    rate_per_kg: float = 0.0
    phone: str = ""
    postcode: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    role: VendorRole = VendorRole.GENERAL

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)


@dataclass(slots=True)
class Order:
    """Represents a pickup order with defaults applied at ingestion."""

    id: str
    name: str = "Unknown"
    phone: str = "Unknown"
    pickup_address: str = ""
    pickup_date: str = ""
    status: str = OrderStatus.PENDING.value
    service: str = ""
    assigned_vendor: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    postcode: str = ""
    region: Optional[str] = None
    order_type: Optional[str] = None
    delivery_type: Optional[str] = None
    rider_fee: Optional[float] = None
    rider_payout: Optional[float] = None
    created_at: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)
