"""
Bahía Escondida Cashless — Product Route Handlers
===================================================

What:  Catalog endpoints under /api/productos.

Endpoints:
    GET  /api/productos?categoria=<cat|todos>   active products, by categoria then nombre
    POST /api/productos                         add a product → 201

Products are typed (see ProductoCreate); malformed bodies get FastAPI's 422.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from app.database import Database, get_database
from app.schemas.cashless import ErrorResponse, ProductoCreate, WriteResponse
from app.services.producto_service import producto_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/productos", tags=["Productos"])

ERROR_RESPONSES = {
    500: {"description": "Database error or database unavailable", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses=ERROR_RESPONSES,
    summary="List active products",
)
async def list_productos(
    categoria: Optional[str] = Query(
        default=None,
        description="Categoría a filtrar; omitir o `todos` para todas",
    ),
    db: Database = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await producto_service.list_productos(db, categoria)


@router.post(
    "",
    status_code=201,
    response_model=WriteResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    summary="Create a product",
)
async def create_producto(
    producto: ProductoCreate,
    db: Database = Depends(get_database),
) -> WriteResponse:
    return await producto_service.create_producto(db, producto)
