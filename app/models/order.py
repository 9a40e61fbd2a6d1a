from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, TypedDict


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Order:
    id: str
    user_id: int
    items: list[dict[str, Any]]
    total_amount: float
    status: str
    shipping_address: Optional[dict[str, Any]]
    created_at: datetime
    updated_at: datetime


class OrderChanges(TypedDict, total=False):
    """Fields an update may overwrite. Anything else on an order is fixed."""

    items: list[dict[str, Any]]
    total_amount: float
    status: str
    shipping_address: Optional[dict[str, Any]]


UPDATABLE_FIELDS = frozenset(OrderChanges.__annotations__)


def merge_changes(order: Order, changes: Mapping[str, Any], updated_at: datetime) -> Order:
    """Shallow merge of ``changes`` over ``order``.

    Keys outside ``UPDATABLE_FIELDS`` are dropped, so ``id``, ``user_id`` and
    ``created_at`` survive any patch. Nested values such as the shipping
    address are replaced wholesale, not merged.
    """
    fields = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
    return replace(order, **fields, updated_at=max(updated_at, order.updated_at))
