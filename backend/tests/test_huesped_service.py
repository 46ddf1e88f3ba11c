"""
Bahía Escondida Cashless — Guest Service Unit Tests
=====================================================

What we test:
    ✅ Create sets fechaRegistro, activo and createdAt on the server
    ✅ List returns only active guests, newest registration first
    ✅ Soft delete hides the guest from the list but not from get-by-id
    ✅ Update strips `_id` and bumps updatedAt
    ✅ Missing and malformed ids raise NotFoundError
    ✅ Without a database, malformed ids still report the database as unavailable
    ✅ Driver errors become DatabaseError with a generic message
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import NetworkTimeout

from app.database import HUESPEDES
from app.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    NotFoundError,
    ValidationError,
)
from app.services.huesped_service import HuespedService


class TestHuespedCreate:

    def setup_method(self):
        self.service = HuespedService()

    @pytest.mark.asyncio
    async def test_create_sets_audit_fields(self, database, mongo_db):
        result = await self.service.create_huesped(
            database, {"nombre": "Ana López", "habitacion": "204"}
        )

        assert result.success is True
        assert result.message == "Huésped registrado exitosamente"
        stored = mongo_db[HUESPEDES].documents[0]
        assert str(stored["_id"]) == result.id
        assert stored["nombre"] == "Ana López"
        assert stored["activo"] is True
        assert stored["fechaRegistro"].endswith("Z")
        assert isinstance(stored["createdAt"], datetime)

    @pytest.mark.asyncio
    async def test_create_ignores_client_controlled_fields(self, database, mongo_db):
        await self.service.create_huesped(
            database,
            {"_id": "hack", "nombre": "Luis", "activo": False, "fechaRegistro": "1999-01-01"},
        )

        stored = mongo_db[HUESPEDES].documents[0]
        assert isinstance(stored["_id"], ObjectId)
        assert stored["activo"] is True
        assert stored["fechaRegistro"] != "1999-01-01"

    @pytest.mark.asyncio
    async def test_create_rejects_non_object_body(self, database):
        with pytest.raises(ValidationError):
            await self.service.create_huesped(database, ["not", "an", "object"])

    @pytest.mark.asyncio
    async def test_create_rejects_operator_keys(self, database):
        with pytest.raises(ValidationError, match="Campo no permitido"):
            await self.service.create_huesped(database, {"$where": "1"})


class TestHuespedList:

    def setup_method(self):
        self.service = HuespedService()

    @pytest.mark.asyncio
    async def test_list_active_newest_first(self, database, mongo_db):
        collection = mongo_db[HUESPEDES]
        await collection.insert_one({"nombre": "A", "activo": True, "fechaRegistro": "2024-01-01T10:00:00.000Z"})
        await collection.insert_one({"nombre": "B", "activo": True, "fechaRegistro": "2024-03-01T10:00:00.000Z"})
        await collection.insert_one({"nombre": "C", "activo": False, "fechaRegistro": "2024-04-01T10:00:00.000Z"})
        await collection.insert_one({"nombre": "D", "activo": True, "fechaRegistro": "2024-02-01T10:00:00.000Z"})

        huespedes = await self.service.list_huespedes(database)

        assert [h["nombre"] for h in huespedes] == ["B", "D", "A"]
        assert all(isinstance(h["_id"], str) for h in huespedes)

    @pytest.mark.asyncio
    async def test_list_empty(self, database):
        assert await self.service.list_huespedes(database) == []


class TestHuespedGetUpdateDelete:

    def setup_method(self):
        self.service = HuespedService()

    @pytest.mark.asyncio
    async def test_soft_delete_hides_from_list_but_not_get(self, database, mongo_db):
        created = await self.service.create_huesped(database, {"nombre": "Marta"})

        deleted = await self.service.delete_huesped(database, created.id)

        assert deleted.message == "Huésped eliminado exitosamente"
        assert await self.service.list_huespedes(database) == []
        huesped = await self.service.get_huesped(database, created.id)
        assert huesped["activo"] is False
        assert huesped["_id"] == created.id
        assert isinstance(mongo_db[HUESPEDES].documents[0]["deletedAt"], datetime)
        assert len(mongo_db[HUESPEDES].documents) == 1

    @pytest.mark.asyncio
    async def test_update_strips_id_and_sets_updated_at(self, database, mongo_db):
        created = await self.service.create_huesped(database, {"nombre": "Pedro"})
        other_id = str(ObjectId())

        result = await self.service.update_huesped(
            database, created.id, {"_id": other_id, "habitacion": "101"}
        )

        assert result.message == "Huésped actualizado exitosamente"
        assert result.id is None
        stored = mongo_db[HUESPEDES].documents[0]
        assert str(stored["_id"]) == created.id
        assert stored["habitacion"] == "101"
        assert stored["nombre"] == "Pedro"
        assert isinstance(stored["updatedAt"], datetime)

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, database):
        with pytest.raises(NotFoundError, match="Huésped no encontrado"):
            await self.service.get_huesped(database, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_malformed_id_raises_not_found(self, database):
        with pytest.raises(NotFoundError):
            await self.service.get_huesped(database, "no-es-un-id")
        with pytest.raises(NotFoundError):
            await self.service.update_huesped(database, "123", {"nombre": "x"})
        with pytest.raises(NotFoundError):
            await self.service.delete_huesped(database, "zzzzzzzzzzzzzzzzzzzzzzzz")

    @pytest.mark.asyncio
    async def test_degraded_checks_database_before_id(self, degraded_database):
        with pytest.raises(DatabaseUnavailableError):
            await self.service.get_huesped(degraded_database, "no-es-un-id")
        with pytest.raises(DatabaseUnavailableError):
            await self.service.update_huesped(degraded_database, "123", {"nombre": "x"})
        with pytest.raises(DatabaseUnavailableError):
            await self.service.delete_huesped(degraded_database, "no-es-un-id")

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, database):
        with pytest.raises(NotFoundError):
            await self.service.update_huesped(database, str(ObjectId()), {"nombre": "x"})

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, database):
        with pytest.raises(NotFoundError):
            await self.service.delete_huesped(database, str(ObjectId()))

    @pytest.mark.asyncio
    async def test_driver_error_becomes_database_error(self, database, mongo_db):
        collection = mongo_db[HUESPEDES]
        with patch.object(
            collection, "find_one", AsyncMock(side_effect=NetworkTimeout("socket timed out"))
        ):
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.get_huesped(database, str(ObjectId()))

        assert exc_info.value.message == "Error al obtener huésped"
        assert "socket" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "NetworkTimeout"
