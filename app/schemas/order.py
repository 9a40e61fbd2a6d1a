from datetime import datetime, timezone
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_serializer
from pydantic.alias_generators import to_camel

from app.models.order import OrderChanges, OrderStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderItem(CamelModel):
    product_id: str
    product_name: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)


class ShippingAddress(CamelModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class OrderCreate(CamelModel):
    user_id: StrictInt
    items: List[OrderItem] = Field(min_length=1)
    total_amount: float = Field(ge=0)
    status: Optional[OrderStatus] = None
    shipping_address: Optional[ShippingAddress] = None


class OrderUpdate(CamelModel):
    items: Optional[List[OrderItem]] = Field(default=None, min_length=1)
    total_amount: Optional[float] = Field(default=None, ge=0)
    status: Optional[OrderStatus] = None
    shipping_address: Optional[ShippingAddress] = None

    def to_changes(self) -> OrderChanges:
        """Only the fields the client sent. ``shippingAddress: null`` clears it."""
        sent = self.model_dump(exclude_unset=True)
        changes: OrderChanges = {}
        if sent.get("items") is not None:
            changes["items"] = sent["items"]
        if sent.get("total_amount") is not None:
            changes["total_amount"] = sent["total_amount"]
        if self.status is not None:
            changes["status"] = self.status.value
        if "shipping_address" in sent:
            changes["shipping_address"] = sent["shipping_address"]
        return changes


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderResponse(CamelModel):
    id: str
    user_id: int
    items: List[OrderItem]
    total_amount: float
    status: str
    shipping_address: Optional[ShippingAddress] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        # Fixed precision and offset so the strings sort chronologically.
        return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[List[Any]] = None
