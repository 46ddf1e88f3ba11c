"""
Bahía Escondida Cashless — Transaction Service
================================================

What:  Append-only access to `transacciones`: list all, list by guest, create.
How:   One storage call per method. `fecha` is always assigned by the server,
       so listings sorted by `fecha` reflect the order charges were recorded.
Who:   Called by the /api/transacciones route handlers.

Guest reference:
    `huespedId` must be present, but the guest's existence is not checked.
    Charges are recorded even if the guest document was soft-deleted.
"""

import logging
from typing import Any, Dict, List, Mapping

from pymongo import DESCENDING

from app.database import TRANSACCIONES, Database
from app.exceptions import ValidationError
from app.schemas.cashless import WriteResponse, serialize_documents
from app.services.common import clean_body, storage_errors, to_iso, utc_now

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("fecha", DESCENDING)]


class TransaccionService:
    """Business logic for transaction documents."""

    async def list_transacciones(self, db: Database) -> List[Dict[str, Any]]:
        collection = db.collection(TRANSACCIONES)
        with storage_errors("Error al obtener transacciones"):
            transacciones = await collection.find({}).sort(NEWEST_FIRST).to_list()
        return serialize_documents(transacciones)

    async def list_by_huesped(self, db: Database, huesped_id: str) -> List[Dict[str, Any]]:
        """Transactions whose `huespedId` equals the given string, newest first."""
        collection = db.collection(TRANSACCIONES)
        with storage_errors("Error al obtener transacciones", huesped_id=huesped_id):
            transacciones = await (
                collection.find({"huespedId": huesped_id}).sort(NEWEST_FIRST).to_list()
            )
        return serialize_documents(transacciones)

    async def create_transaccion(self, db: Database, body: Mapping[str, Any]) -> WriteResponse:
        """
        Records a charge or top-up.

        Client-sent `fecha`/`createdAt` are overwritten with the server time.

        Raises:
            ValidationError: body is not an object or lacks a string `huespedId` (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        data = clean_body(body)
        huesped_id = data.get("huespedId")
        if not isinstance(huesped_id, str) or not huesped_id.strip():
            raise ValidationError(
                message="huespedId es requerido",
                field="huespedId",
            )

        now = utc_now()
        nueva_transaccion = {
            **data,
            "fecha": to_iso(now),
            "createdAt": now,
        }

        collection = db.collection(TRANSACCIONES)
        with storage_errors("Error al crear transacción", huesped_id=huesped_id):
            result = await collection.insert_one(nueva_transaccion)

        logger.info("Transacción %s registrada para huésped %s", result.inserted_id, huesped_id)
        return WriteResponse(
            id=str(result.inserted_id),
            message="Transacción registrada exitosamente",
        )


transaccion_service = TransaccionService()
