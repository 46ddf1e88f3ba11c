"""
Bahía Escondida Cashless — Product Service
============================================

What:  Catalog listing (optionally by category) and product creation.
Who:   Called by the /api/productos route handlers.

Filter rules:
    categoria absent or "todos" → all active products
    categoria=<cat>              → active products of that category
    Inactive products are never listed. Order: categoria, then nombre.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING

from app.database import PRODUCTOS, Database
from app.schemas.cashless import ProductoCreate, WriteResponse, serialize_documents
from app.services.common import clean_body, storage_errors, utc_now

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "todos"
CATALOG_ORDER = [("categoria", ASCENDING), ("nombre", ASCENDING)]


def build_filter(categoria: Optional[str]) -> Dict[str, Any]:
    if categoria and categoria != ALL_CATEGORIES:
        return {"categoria": categoria, "activo": True}
    return {"activo": True}


class ProductoService:
    """Business logic for the product catalog."""

    async def list_productos(
        self, db: Database, categoria: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        filtro = build_filter(categoria)
        collection = db.collection(PRODUCTOS)
        with storage_errors("Error al obtener productos", categoria=categoria):
            productos = await collection.find(filtro).sort(CATALOG_ORDER).to_list()
        return serialize_documents(productos)

    async def create_producto(self, db: Database, producto: ProductoCreate) -> WriteResponse:
        """Inserts the product with `activo` defaulting to True and fresh timestamps."""
        data = clean_body(producto.model_dump())
        if data.get("activo") is None:
            data["activo"] = True
        now = utc_now()
        data["createdAt"] = now
        data["updatedAt"] = now

        collection = db.collection(PRODUCTOS)
        with storage_errors("Error al crear producto", nombre=producto.nombre):
            result = await collection.insert_one(data)

        logger.info("Producto creado: %s (%s)", producto.nombre, result.inserted_id)
        return WriteResponse(
            id=str(result.inserted_id),
            message="Producto creado exitosamente",
        )


producto_service = ProductoService()
