from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    return {
        "status": "UP",
        "service": request.app.state.settings.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
async def root(request: Request) -> dict[str, str]:
    settings = request.app.state.settings
    return {
        "message": "Order Service API",
        "version": settings.version,
        "documentation": request.app.docs_url or ""
    }
