import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.logging import setup_logging
from app.api.errors import register_exception_handlers
from app.api.orders import router as orders_router
from app.api.health import router as health_router
from app.repositories.order import OrderRepository
from app.services.seed import seed_sample_orders
from app.services.users import UserServiceClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    if app.state.owns_user_client and app.state.user_client.is_closed:
        app.state.user_client = UserServiceClient.from_settings(settings)

    if settings.seed_sample_data:
        seed_sample_orders(app.state.repository)

    logger.info(f"{settings.service_name} started with {len(app.state.repository)} orders")

    yield

    if app.state.owns_user_client:
        await app.state.user_client.aclose()
    logger.info(f"{settings.service_name} stopped")


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[OrderRepository] = None,
    user_client: Optional[UserServiceClient] = None
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Order Service",
        description="Order management microservice",
        version=settings.version,
        docs_url="/api-docs",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.repository = repository if repository is not None else OrderRepository()
    app.state.owns_user_client = user_client is None
    app.state.user_client = user_client or UserServiceClient.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(orders_router)

    return app


app = create_app()
