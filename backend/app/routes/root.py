"""
Bahía Escondida Cashless — Info & Ping Routes
===============================================

What:  GET / (service info, no storage access) and GET /api/ping (database liveness).
Who:   Called by the POS frontend on load, Docker health checks and operators.

Status semantics:
    GET /          → always 200 while the process is up, even in degraded mode
    GET /api/ping  → 200 when MongoDB answers the ping, 500 otherwise
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app import __version__
from app.database import Database, get_database
from app.exceptions import DatabaseError
from app.schemas.cashless import InfoResponse, PingErrorResponse, PingResponse
from app.services.common import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Info"])

SERVICE_NAME = "Bahía Escondida Cashless API"
PING_ERROR = "Error de conexión a MongoDB"


@router.get(
    "/",
    response_model=InfoResponse,
    summary="Service info",
)
async def root() -> InfoResponse:
    return InfoResponse(status="ok", message=SERVICE_NAME, version=__version__)


@router.get(
    "/api/ping",
    response_model=PingResponse,
    responses={500: {"description": "MongoDB unreachable", "model": PingErrorResponse}},
    summary="Check MongoDB connectivity",
)
async def ping(db: Database = Depends(get_database)):
    """
    Issues a `ping` command against the database.

    Failures are answered here (not by the global handlers) so the body
    keeps the `{success, error}` shape the frontend polls for. The error
    text is the same whether the server is unreachable or never connected.
    """
    try:
        await db.ping()
    except DatabaseError as e:
        logger.warning("Ping sin respuesta: %s", e.message)
        return JSONResponse(
            status_code=500,
            content=PingErrorResponse(error=PING_ERROR).model_dump(),
        )

    return PingResponse(
        success=True,
        message="Conexión a MongoDB exitosa",
        timestamp=utc_now(),
    )
