"""
Bahía Escondida Cashless — Guest Service
==========================================

What:  List, get, create, update and soft-delete guests (`huespedes`).
How:   Each method performs exactly one storage call on the guest collection
       and maps the outcome to a response model or an application exception.
Who:   Called by the /api/huespedes route handlers.

Soft Delete:
    Guests are never physically removed. DELETE sets `activo=false` and
    `deletedAt` in one atomic $set; the default listing only returns
    `activo=true`, while a lookup by id still returns the deleted guest.
"""

import logging
from typing import Any, Dict, List, Mapping

from pymongo import DESCENDING

from app.database import HUESPEDES, Database
from app.exceptions import NotFoundError
from app.schemas.cashless import WriteResponse, serialize_document, serialize_documents
from app.services.common import clean_body, parse_object_id, storage_errors, to_iso, utc_now

logger = logging.getLogger(__name__)

RESOURCE = "Huésped"


class HuespedService:
    """Business logic for guest documents."""

    async def list_huespedes(self, db: Database) -> List[Dict[str, Any]]:
        """Active guests, most recently registered first."""
        collection = db.collection(HUESPEDES)
        with storage_errors("Error al obtener huéspedes"):
            cursor = collection.find({"activo": True}).sort([("fechaRegistro", DESCENDING)])
            huespedes = await cursor.to_list()
        return serialize_documents(huespedes)

    async def get_huesped(self, db: Database, huesped_id: str) -> Dict[str, Any]:
        """
        Single guest by id, including soft-deleted ones.

        Raises:
            NotFoundError: id is malformed or no document has it (→ 404)
            DatabaseError: query failed (→ 500)
        """
        collection = db.collection(HUESPEDES)
        oid = parse_object_id(huesped_id, RESOURCE)
        with storage_errors("Error al obtener huésped", huesped_id=huesped_id):
            huesped = await collection.find_one({"_id": oid})

        if huesped is None:
            raise NotFoundError(resource=RESOURCE, resource_id=huesped_id)
        return serialize_document(huesped)

    async def create_huesped(self, db: Database, body: Mapping[str, Any]) -> WriteResponse:
        """Inserts the caller's fields plus registration date, `activo=true` and `createdAt`."""
        data = clean_body(body)
        now = utc_now()
        nuevo_huesped = {
            **data,
            "fechaRegistro": to_iso(now),
            "activo": True,
            "createdAt": now,
        }

        collection = db.collection(HUESPEDES)
        with storage_errors("Error al crear huésped"):
            result = await collection.insert_one(nuevo_huesped)

        logger.info("Huésped registrado: %s", result.inserted_id)
        return WriteResponse(
            id=str(result.inserted_id),
            message="Huésped registrado exitosamente",
        )

    async def update_huesped(
        self, db: Database, huesped_id: str, body: Mapping[str, Any]
    ) -> WriteResponse:
        """
        Merges the provided fields into the guest and bumps `updatedAt`.

        `_id` in the body is ignored; every other key is $set as given.
        """
        collection = db.collection(HUESPEDES)
        oid = parse_object_id(huesped_id, RESOURCE)
        data = clean_body(body)
        with storage_errors("Error al actualizar huésped", huesped_id=huesped_id):
            result = await collection.update_one(
                {"_id": oid},
                {"$set": {**data, "updatedAt": utc_now()}},
            )

        if result.matched_count == 0:
            raise NotFoundError(resource=RESOURCE, resource_id=huesped_id)
        return WriteResponse(message="Huésped actualizado exitosamente")

    async def delete_huesped(self, db: Database, huesped_id: str) -> WriteResponse:
        """Soft delete: `activo=false` + `deletedAt`; the document stays."""
        collection = db.collection(HUESPEDES)
        oid = parse_object_id(huesped_id, RESOURCE)
        with storage_errors("Error al eliminar huésped", huesped_id=huesped_id):
            result = await collection.update_one(
                {"_id": oid},
                {"$set": {"activo": False, "deletedAt": utc_now()}},
            )

        if result.matched_count == 0:
            raise NotFoundError(resource=RESOURCE, resource_id=huesped_id)
        logger.info("Huésped %s marcado como inactivo", huesped_id)
        return WriteResponse(message="Huésped eliminado exitosamente")


# Module-level instance used by the route handlers
huesped_service = HuespedService()
