from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.api.errors import ApiError
from app.repositories.order import OrderRepository
from app.schemas.order import (
    ErrorResponse,
    MessageResponse,
    OrderCreate,
    OrderResponse,
    OrderStatusUpdate,
    OrderUpdate,
)
from app.services.order import OrderService
from app.services.users import UserNotFoundError, UserServiceClient

router = APIRouter(prefix="/api/orders", tags=["orders"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Order not found"}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid input"}}


def get_repository(request: Request) -> OrderRepository:
    return request.app.state.repository


def get_user_client(request: Request) -> Optional[UserServiceClient]:
    if not request.app.state.settings.verify_users:
        return None
    return request.app.state.user_client


def get_order_service(
    repository: OrderRepository = Depends(get_repository),
    user_client: Optional[UserServiceClient] = Depends(get_user_client)
) -> OrderService:
    return OrderService(repository, user_client)


def order_not_found(order_id: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, "Order not found", f"Order {order_id} not found")


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    user_id: Optional[str] = Query(default=None, alias="userId", description="Filter orders by user ID"),
    service: OrderService = Depends(get_order_service)
) -> List[OrderResponse]:
    return await service.list_orders(user_id)


@router.get("/{order_id}", response_model=OrderResponse, responses=NOT_FOUND)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    order = await service.get_order(order_id)
    if not order:
        raise order_not_found(order_id)
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, responses=BAD_REQUEST)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    try:
        return await service.create_order(order_data)
    except UserNotFoundError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "User not found", str(e))


@router.put("/{order_id}", response_model=OrderResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def update_order(
    order_id: str,
    order_data: OrderUpdate,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    order = await service.update_order(order_id, order_data)
    if not order:
        raise order_not_found(order_id)
    return order


@router.delete("/{order_id}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> MessageResponse:
    if not await service.delete_order(order_id):
        raise order_not_found(order_id)
    return MessageResponse(message="Order deleted successfully")


@router.patch("/{order_id}/status", response_model=OrderResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
) -> OrderResponse:
    order = await service.update_status(order_id, status_data.status)
    if not order:
        raise order_not_found(order_id)
    return order
