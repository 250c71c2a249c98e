"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /healthz (and /api/healthz) always returns 200 "ok" if process is up
    - GET /healthz/ready returns 503 if the public database is unreachable
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from bbs.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", response_class=PlainTextResponse)
@router.get(
    "/api/healthz", response_class=PlainTextResponse, include_in_schema=False,
)
async def health_check():
    """Basic liveness probe."""
    return "ok"


@router.get("/healthz/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
