"""
Bahía Escondida Cashless — Guest Route Handlers
=================================================

What:  CRUD endpoints for guests under /api/huespedes.
How:   Extracts path/body, delegates to HuespedService, returns JSON.
       Errors are raised as application exceptions and formatted by the
       global handlers in main.py.

Endpoints:
    GET    /api/huespedes        active guests, newest registration first
    GET    /api/huespedes/{id}   one guest (also soft-deleted ones) or 404
    POST   /api/huespedes        register a guest → 201
    PUT    /api/huespedes/{id}   merge fields → 200 / 404
    DELETE /api/huespedes/{id}   soft delete → 200 / 404
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path

from app.database import Database, get_database
from app.schemas.cashless import ErrorResponse, WriteResponse
from app.services.huesped_service import huesped_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/huespedes", tags=["Huéspedes"])

ERROR_RESPONSES = {
    500: {"description": "Database error or database unavailable", "model": ErrorResponse},
}
NOT_FOUND = {404: {"description": "Huésped no encontrado", "model": ErrorResponse}}

HUESPED_ID_DOC = "ObjectId del huésped (24 caracteres hex)"


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses=ERROR_RESPONSES,
    summary="List active guests",
)
async def list_huespedes(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await huesped_service.list_huespedes(db)


@router.get(
    "/{huesped_id}",
    response_model=Dict[str, Any],
    responses={**NOT_FOUND, **ERROR_RESPONSES},
    summary="Get a guest by id",
)
async def get_huesped(
    huesped_id: str = Path(..., description=HUESPED_ID_DOC),
    db: Database = Depends(get_database),
) -> Dict[str, Any]:
    return await huesped_service.get_huesped(db, huesped_id)


@router.post(
    "",
    status_code=201,
    response_model=WriteResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, **ERROR_RESPONSES},
    summary="Register a guest",
)
async def create_huesped(
    body: Any = Body(..., description="Campos libres del huésped"),
    db: Database = Depends(get_database),
) -> WriteResponse:
    return await huesped_service.create_huesped(db, body)


@router.put(
    "/{huesped_id}",
    response_model=WriteResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, **NOT_FOUND, **ERROR_RESPONSES},
    summary="Update a guest",
)
async def update_huesped(
    huesped_id: str = Path(..., description=HUESPED_ID_DOC),
    body: Any = Body(..., description="Campos a actualizar; `_id` se ignora"),
    db: Database = Depends(get_database),
) -> WriteResponse:
    return await huesped_service.update_huesped(db, huesped_id, body)


@router.delete(
    "/{huesped_id}",
    response_model=WriteResponse,
    response_model_exclude_none=True,
    responses={**NOT_FOUND, **ERROR_RESPONSES},
    summary="Soft-delete a guest",
)
async def delete_huesped(
    huesped_id: str = Path(..., description=HUESPED_ID_DOC),
    db: Database = Depends(get_database),
) -> WriteResponse:
    return await huesped_service.delete_huesped(db, huesped_id)
