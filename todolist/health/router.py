"""Health check endpoints."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.db.session import get_db_no_commit
from todolist.health.schemas import HealthResponse, ReadinessResponse
from todolist.items.models import Item
from todolist.lists.models import TodoList

# Health check query timeout in seconds
HEALTH_CHECK_TIMEOUT = 5.0

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Check if the application is running",
)
async def liveness() -> HealthResponse:
    """Liveness probe - is the application running?"""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Check that both collections can be read",
    responses={
        status.HTTP_200_OK: {"description": "Service is ready"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Service is not ready"},
    },
)
async def readiness(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db_no_commit)],
) -> ReadinessResponse:
    """Readiness probe - can the items and lists tables be queried?

    Returns 503 if any check fails.
    """
    checks: dict[str, str] = {}

    for check_name, column in (("items", Item.id), ("lists", TodoList.id)):
        try:
            result = await asyncio.wait_for(
                db.execute(select(func.count(column))),
                timeout=HEALTH_CHECK_TIMEOUT,
            )
            result.scalar()
            checks[check_name] = "ok"
        except TimeoutError:
            logger.warning(
                "Store health check timed out",
                extra={"check": check_name, "timeout_seconds": HEALTH_CHECK_TIMEOUT},
            )
            checks[check_name] = "timeout"
        except SQLAlchemyError as e:
            logger.warning(
                "Store health check failed",
                extra={"check": check_name, "error": str(e)},
            )
            checks[check_name] = "error"

    all_ok = all(v == "ok" for v in checks.values())
    if not all_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(status="ok" if all_ok else "degraded", checks=checks)
