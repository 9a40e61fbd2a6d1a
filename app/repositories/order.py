import copy
import re
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional

from app.models.order import Order, OrderChanges, OrderStatus, merge_changes

Clock = Callable[[], datetime]

_INTEGER_RE = re.compile(r"[+-]?\d+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_user_id(value: Any) -> Optional[int]:
    """Parse a user id given as an int or a decimal string.

    Returns ``None`` when the value is not an integer representation, which
    callers treat as "matches no orders" rather than an error.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            return int(text)
    return None


def _status_value(status: Any) -> Any:
    if isinstance(status, OrderStatus):
        return status.value
    return status


class OrderRepository:
    """In-process order store.

    Orders live in an insertion-ordered dict keyed by id. Every operation
    runs under a single lock and none of them performs I/O.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_now
        self._orders: dict[str, Order] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        with self._lock:
            return len(self._orders)

    def list_all(self) -> list[Order]:
        with self._lock:
            return self._newest_first(self._orders.values())

    def list_by_user(self, user_id: Any) -> list[Order]:
        parsed = coerce_user_id(user_id)
        if parsed is None:
            return []
        with self._lock:
            return self._newest_first(
                order for order in self._orders.values() if order.user_id == parsed
            )

    def find_by_id(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def create(
        self,
        user_id: int,
        items: Iterable[Mapping[str, Any]],
        total_amount: float,
        status: Optional[str] = None,
        shipping_address: Optional[Mapping[str, Any]] = None,
    ) -> Order:
        with self._lock:
            now = self._clock()
            order = Order(
                id=self._new_id(),
                user_id=user_id,
                items=[dict(item) for item in items],
                total_amount=total_amount,
                status=_status_value(status) or OrderStatus.PENDING.value,
                shipping_address=copy.deepcopy(dict(shipping_address)) if shipping_address else None,
                created_at=now,
                updated_at=now,
            )
            self._orders[order.id] = order
            return order

    def update(self, order_id: str, changes: OrderChanges) -> Optional[Order]:
        with self._lock:
            existing = self._orders.get(order_id)
            if existing is None:
                return None

            values = copy.deepcopy(dict(changes))
            if "status" in values:
                values["status"] = _status_value(values["status"])

            updated = merge_changes(existing, values, self._clock())
            self._orders[order_id] = updated
            return updated

    def update_status(self, order_id: str, status: str) -> Optional[Order]:
        return self.update(order_id, {"status": status})

    def delete(self, order_id: str) -> bool:
        with self._lock:
            return self._orders.pop(order_id, None) is not None

    def seed_if_empty(self, orders: Iterable[Mapping[str, Any]]) -> int:
        with self._lock:
            if self._orders:
                return 0
            created = [self.create(**order) for order in orders]
            return len(created)

    def _new_id(self) -> str:
        order_id = str(uuid.uuid4())
        while order_id in self._orders:
            order_id = str(uuid.uuid4())
        return order_id

    @staticmethod
    def _newest_first(orders: Iterable[Order]) -> list[Order]:
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
