import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import get_settings
from src.constants import BackendPath
from src.routes.session import router as session_router
from src.services.orchestrator import get_orchestrator

logger = logging.getLogger(__name__)


async def check_backend(
    backend_url: str, transport: httpx.AsyncBaseTransport | None = None
) -> bool:
    """백엔드 연결 확인 (실패해도 앱은 계속 동작)"""
    try:
        async with httpx.AsyncClient(timeout=5.0, transport=transport) as client:
            resp = await client.get(f"{backend_url.rstrip('/')}{BackendPath.HEALTH}")
    except httpx.HTTPError as e:
        logger.error(f"백엔드 연결 실패: {e!r}")
        return False

    if resp.is_error:
        logger.error(f"백엔드 HTTP 에러: {resp.status_code}")
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    if settings.backend_health_check:
        await check_backend(settings.backend_url)
    yield
    await get_orchestrator().aclose()


app = FastAPI(lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type"],
    max_age=600,
)

app.include_router(session_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
