# src/libs/portfolio-common/portfolio_common/health.py
import asyncio
import logging
from typing import Awaitable, Callable, Dict

from fastapi import APIRouter, HTTPException, status

logger = logging.getLogger(__name__)

DependencyCheck = Callable[[], Awaitable[bool]]


def create_health_router(checks: Dict[str, DependencyCheck] | None = None) -> APIRouter:
    """
    Creates a standardized health check router.

    Args:
        checks: Mapping of dependency name to an async check returning True
                when the dependency is usable. Evaluated by the readiness probe.

    Returns:
        A FastAPI APIRouter with /health/live and /health/ready endpoints.
    """
    router = APIRouter(tags=["Health"])
    checks = checks or {}

    @router.get("/health/live", status_code=status.HTTP_200_OK)
    async def liveness_probe():
        return {"status": "alive"}

    @router.get("/health/ready", status_code=status.HTTP_200_OK)
    async def readiness_probe():
        names = list(checks)
        results = await asyncio.gather(
            *[checks[name]() for name in names], return_exceptions=True
        )

        dep_status = {}
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(f"Health Check: {name} check raised: {result}", exc_info=False)
            dep_status[name] = "ok" if result is True else "unavailable"

        if all(value == "ok" for value in dep_status.values()):
            return {"status": "ready", "dependencies": dep_status}

        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "dependencies": dep_status},
        )

    return router
