import logging

from app.models.order import OrderStatus
from app.repositories.order import OrderRepository

logger = logging.getLogger(__name__)

_SAMPLE_ADDRESS = {
    "street": "123 Main St",
    "city": "San Francisco",
    "state": "CA",
    "zip_code": "94102",
    "country": "USA",
}

SAMPLE_ORDERS = [
    {
        "user_id": 1,
        "items": [
            {"product_id": "PROD-001", "product_name": "Laptop", "quantity": 1, "price": 999.99},
        ],
        "total_amount": 999.99,
        "status": OrderStatus.DELIVERED.value,
        "shipping_address": _SAMPLE_ADDRESS,
    },
    {
        "user_id": 1,
        "items": [
            {"product_id": "PROD-002", "product_name": "Mouse", "quantity": 2, "price": 29.99},
            {"product_id": "PROD-003", "product_name": "Keyboard", "quantity": 1, "price": 79.99},
        ],
        "total_amount": 139.97,
        "status": OrderStatus.PROCESSING.value,
        "shipping_address": _SAMPLE_ADDRESS,
    },
]


def seed_sample_orders(repository: OrderRepository) -> int:
    created = repository.seed_if_empty(SAMPLE_ORDERS)
    if created:
        logger.info(f"Seeded {created} sample orders")
    return created
