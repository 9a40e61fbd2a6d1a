import logging
from typing import Any, Optional

import httpx

from app.core.config import Settings

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserServiceClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        self.base_url = base_url
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserServiceClient":
        return cls(settings.user_service_url, timeout=settings.user_service_timeout)

    async def get_user(self, user_id: int) -> Optional[dict[str, Any]]:
        response = await self.client.get(f"/api/users/{user_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(f"User {user_id} not found in user service")
            return None
        response.raise_for_status()
        return response.json()

    @property
    def is_closed(self) -> bool:
        return self.client.is_closed

    async def aclose(self) -> None:
        await self.client.aclose()
