"""
Health Check Router - FindWay Assessment Engine
findway/routers/health.py

Returns health status of the session cache and AI provider configuration.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

import redis

from findway.config import get_settings
from findway.services.cache import InMemoryCache, get_cache

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


async def check_redis() -> str:
    """Check Redis connection health."""
    redis_url = get_settings().REDIS_URL
    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        client.ping()
        client.close()
        return f"healthy (URL: {redis_url})"
    except (redis.RedisError, ConnectionError, ValueError) as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


async def check_session_cache() -> str:
    """Report which session cache backend is active."""
    cache = get_cache()
    if isinstance(cache, InMemoryCache):
        return "degraded: in-memory fallback, sessions do not survive restarts"
    return "healthy (redis)"


async def check_ai_provider() -> str:
    """Check the AI provider is configured (no request is made)."""
    settings = get_settings()
    if settings.AI_PROVIDER == "gemini" and settings.GEMINI_API_KEY is None:
        return "unhealthy: Missing env vars: GEMINI_API_KEY"
    return f"healthy (provider: {settings.AI_PROVIDER}, model: {settings.GEMINI_MODEL})"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
    description="Check health of all dependencies.",
)
async def health_check():
    """Check health of all dependencies."""
    dependencies = {
        "redis": await check_redis(),
        "session_cache": await check_session_cache(),
        "ai_provider": await check_ai_provider(),
    }

    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
