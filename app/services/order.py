import logging
from typing import List, Optional

from app.models.order import Order, OrderStatus
from app.repositories.order import OrderRepository
from app.schemas.order import OrderCreate, OrderResponse, OrderUpdate, OrderItem, ShippingAddress
from app.services.users import UserNotFoundError, UserServiceClient

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, repository: OrderRepository, user_client: Optional[UserServiceClient] = None) -> None:
        self.repository = repository
        self.user_client = user_client

    async def list_orders(self, user_id: Optional[str] = None) -> List[OrderResponse]:
        if user_id:
            orders = self.repository.list_by_user(user_id)
        else:
            orders = self.repository.list_all()
        return [self._to_response(order) for order in orders]

    async def get_order(self, order_id: str) -> Optional[OrderResponse]:
        order = self.repository.find_by_id(order_id)
        if not order:
            return None
        return self._to_response(order)

    async def create_order(self, order_data: OrderCreate) -> OrderResponse:
        if self.user_client is not None:
            user = await self.user_client.get_user(order_data.user_id)
            if user is None:
                raise UserNotFoundError(order_data.user_id)

        order = self.repository.create(
            user_id=order_data.user_id,
            items=[item.model_dump() for item in order_data.items],
            total_amount=order_data.total_amount,
            status=order_data.status.value if order_data.status else None,
            shipping_address=order_data.shipping_address.model_dump() if order_data.shipping_address else None
        )

        logger.info(f"Order created: {order.id} for user {order.user_id}")
        return self._to_response(order)

    async def update_order(self, order_id: str, order_data: OrderUpdate) -> Optional[OrderResponse]:
        order = self.repository.update(order_id, order_data.to_changes())
        if not order:
            return None

        logger.info(f"Order updated: {order.id}")
        return self._to_response(order)

    async def delete_order(self, order_id: str) -> bool:
        deleted = self.repository.delete(order_id)
        if deleted:
            logger.info(f"Order deleted: {order_id}")
        return deleted

    async def update_status(self, order_id: str, status: OrderStatus) -> Optional[OrderResponse]:
        order = self.repository.update_status(order_id, status.value)
        if not order:
            return None

        logger.info(f"Order updated: {order.id}, status: {order.status}")
        return self._to_response(order)

    @staticmethod
    def _to_response(order: Order) -> OrderResponse:
        return OrderResponse(
            id=order.id,
            user_id=order.user_id,
            items=[OrderItem(**item) for item in order.items],
            total_amount=float(order.total_amount),
            status=order.status,
            shipping_address=ShippingAddress(**order.shipping_address) if order.shipping_address else None,
            created_at=order.created_at,
            updated_at=order.updated_at
        )
