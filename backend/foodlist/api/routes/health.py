"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health (trailing slash optional) always returns 200 if the process
      is up (liveness)
    - GET /api/v1/health/ready returns 503 if the database is unreachable or any of
      the four aggregate tables is missing (migrations not applied)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Table check via SQLAlchemy inspect: a reachable but empty database is not ready
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import inspect

from foodlist.config import get_settings
from foodlist.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

REQUIRED_TABLES = ("households", "users", "shopping_lists", "items")


@router.get("", status_code=status.HTTP_200_OK)
@router.get("/", status_code=status.HTTP_200_OK, include_in_schema=False)
async def health_check():
    """Liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity plus schema presence."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return _not_ready("database_unavailable")

    async with manager.engine.connect() as conn:
        tables = await conn.run_sync(
            lambda sync_conn: set(inspect(sync_conn).get_table_names()),
        )
    missing = [t for t in REQUIRED_TABLES if t not in tables]
    if missing:
        logger.warning(f"Readiness: missing tables {missing}")
        return _not_ready("schema_missing", missing_tables=missing)
    return {"status": "ready", "checks": {"database": "healthy", "schema": "present"}}


def _not_ready(reason: str, **details) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **details},
    )
