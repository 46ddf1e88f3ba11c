"""
Bahía Escondida Cashless — Transaction Route Handlers
=======================================================

What:  Append-only endpoints under /api/transacciones.

Endpoints:
    GET  /api/transacciones                       all transactions, newest first
    GET  /api/transacciones/huesped/{huespedId}   one guest's transactions, newest first
    POST /api/transacciones                       record a transaction → 201

There is no PUT or DELETE: a wrong charge is corrected with a new transaction.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path

from app.database import Database, get_database
from app.schemas.cashless import ErrorResponse, WriteResponse
from app.services.transaccion_service import transaccion_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transacciones", tags=["Transacciones"])

ERROR_RESPONSES = {
    500: {"description": "Database error or database unavailable", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses=ERROR_RESPONSES,
    summary="List all transactions",
)
async def list_transacciones(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await transaccion_service.list_transacciones(db)


@router.get(
    "/huesped/{huesped_id}",
    response_model=List[Dict[str, Any]],
    responses=ERROR_RESPONSES,
    summary="List a guest's transactions",
)
async def list_transacciones_huesped(
    huesped_id: str = Path(..., description="Valor de `huespedId` a filtrar"),
    db: Database = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await transaccion_service.list_by_huesped(db, huesped_id)


@router.post(
    "",
    status_code=201,
    response_model=WriteResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, **ERROR_RESPONSES},
    summary="Record a transaction",
)
async def create_transaccion(
    body: Any = Body(
        ...,
        description="Campos libres; `huespedId` es obligatorio, `fecha` la asigna el servidor",
    ),
    db: Database = Depends(get_database),
) -> WriteResponse:
    return await transaccion_service.create_transaccion(db, body)
