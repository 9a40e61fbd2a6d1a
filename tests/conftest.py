from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.config import Settings
from app.main import create_app
from app.repositories.order import OrderRepository


class TickingClock:
    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repository(clock):
    return OrderRepository(clock=clock)


@pytest.fixture
def test_settings():
    return Settings(verify_users=False, seed_sample_data=False, log_level="WARNING")


@pytest_asyncio.fixture
async def app(test_settings, repository):
    application = create_app(settings=test_settings, repository=repository)
    yield application
    await application.state.user_client.aclose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def order_payload():
    return {
        "userId": 1,
        "items": [
            {"productId": "P1", "productName": "Widget", "quantity": 2, "price": 10.0}
        ],
        "totalAmount": 20.0
    }
