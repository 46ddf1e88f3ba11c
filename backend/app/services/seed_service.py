"""
Bahía Escondida Cashless — Product Catalog Seeder
===================================================

What:  Fills an empty `productos` collection with the default resort catalog.
When:  Once per process start, right after a successful database connection.
How:   count_documents → insert_many only when the count is exactly zero.

Concurrency:
    Count-then-insert is not atomic. Two instances starting at the same time
    against an empty catalog may both insert it; the duplicates are harmless
    catalog rows and can be deactivated by hand.
"""

import logging
from typing import Any, Dict, List

from app.database import PRODUCTOS, Database
from app.services.common import storage_errors, utc_now

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTOS: List[Dict[str, Any]] = [
    {"nombre": "Hamburguesa Clásica", "precio": 150, "categoria": "alimentos", "icono": "🍔"},
    {"nombre": "Pizza Margarita", "precio": 180, "categoria": "alimentos", "icono": "🍕"},
    {"nombre": "Ensalada Caesar", "precio": 120, "categoria": "alimentos", "icono": "🥗"},
    {"nombre": "Cerveza Corona", "precio": 60, "categoria": "bebidas", "icono": "🍺"},
    {"nombre": "Margarita", "precio": 120, "categoria": "bebidas", "icono": "🍹"},
    {"nombre": "Agua Mineral", "precio": 35, "categoria": "bebidas", "icono": "💧"},
    {"nombre": "Café Americano", "precio": 45, "categoria": "bebidas", "icono": "☕"},
    {"nombre": "Renta Kayak 1hr", "precio": 200, "categoria": "deportes", "icono": "🚣"},
    {"nombre": "Tabla Paddle 1hr", "precio": 250, "categoria": "deportes", "icono": "🏄"},
    {"nombre": "Masaje Relajante", "precio": 450, "categoria": "spa", "icono": "💆"},
]


def default_catalog() -> List[Dict[str, Any]]:
    """Fresh copies of the default products with `activo` and timestamps."""
    now = utc_now()
    return [
        {**producto, "activo": True, "createdAt": now, "updatedAt": now}
        for producto in DEFAULT_PRODUCTOS
    ]


class SeedService:

    async def ensure_seeded(self, db: Database) -> int:
        """
        Inserts the default catalog if and only if `productos` is empty.

        Returns:
            Number of inserted products (0 when the catalog already had data).

        Raises:
            DatabaseUnavailableError: adapter is not connected
            DatabaseError: count or insert failed
        """
        collection = db.collection(PRODUCTOS)
        with storage_errors("Error al verificar el catálogo de productos"):
            count = await collection.count_documents({})
        if count != 0:
            logger.debug("Catálogo existente con %d productos; no se inserta nada", count)
            return 0

        catalog = default_catalog()
        with storage_errors("Error al insertar productos base"):
            await collection.insert_many(catalog)
        logger.info("Productos base insertados: %d", len(catalog))
        return len(catalog)


seed_service = SeedService()
