"""Order API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Order


class OrderModel(BaseModel):
    id: str
    name: str
    phone: str
    pickup_address: str
    pickup_date: str
    status: str
    service: str
    assigned_vendor: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    postcode: str
    region: Optional[str] = None
    order_type: Optional[str] = None
    delivery_type: Optional[str] = None
    rider_fee: Optional[float] = None
    rider_payout: Optional[float] = None
    created_at: Optional[str] = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderModel":
        return cls(
            id=order.id,
            name=order.name,
            phone=order.phone,
            pickup_address=order.pickup_address,
            pickup_date=order.pickup_date,
            status=order.status,
            service=order.service,
            assigned_vendor=order.assigned_vendor,
            latitude=order.latitude,
            longitude=order.longitude,
            postcode=order.postcode,
            region=order.region,
            order_type=order.order_type,
            delivery_type=order.delivery_type,
            rider_fee=order.rider_fee,
            rider_payout=order.rider_payout,
            created_at=order.created_at,
        )


class OrdersResponse(BaseModel):
    orders: List[OrderModel]


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., min_length=1)


class VendorUpdateRequest(BaseModel):
    vendor: Optional[str] = Field(
        default=None,
        description="Vendor name to assign. Empty or null clears the assignment.",
    )


class AssignmentOutcomeModel(BaseModel):
    fired: bool
    success: bool
    vendor: Optional[str] = None
    vendor_area: Optional[str] = None
    rule: Optional[str] = None
    message: str


class OrderUpdateResponse(BaseModel):
    success: bool
    message: str
    order_id: str
    notification: Optional[str] = None
    assignment: Optional[AssignmentOutcomeModel] = None
