"""
Bahía Escondida Cashless — Pydantic Request/Response Schemas
==============================================================

What:  Pydantic models defining the API contract between the POS frontend and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.
Who:   Used by route handlers and services.

Body Policy:
    Guests and transactions are schema-less: their bodies are accepted as a
    JSON object ("extra attributes" bag) and only server-managed keys are
    stripped or overwritten by the services. Products have a typed model;
    unknown product keys are kept as extras.

Documents:
    Reads return raw MongoDB documents. `serialize_document` converts the
    BSON-only values (ObjectId) so FastAPI can encode them as JSON.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Mapping, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, Field, StrictInt, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


# Whole-peso prices stay integers in storage; only fractional ones become doubles
Precio = Union[Annotated[StrictInt, Field(ge=0)], Annotated[float, Field(ge=0)]]


class ProductoCreate(BaseModel):
    """
    What:  Body of POST /api/productos.
    When:  Staff adds an item to the POS catalog.

    `activo` may be omitted; the service then stores True.
    """
    nombre: str = Field(min_length=1, description="Nombre visible en el POS")
    precio: Precio = Field(description="Precio unitario")
    categoria: str = Field(min_length=1, description="Categoría (alimentos, bebidas, ...)")
    icono: str = Field(default="", description="Emoji o icono del producto")
    activo: Optional[bool] = Field(default=None, description="Visible en el catálogo")

    model_config = {"extra": "allow"}

    @field_validator("nombre", "categoria")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WriteResponse(BaseModel):
    """
    What:  Envelope returned by every write (create/update/soft-delete).
    Example:
        {"success": true, "id": "6650f0...", "message": "Huésped registrado exitosamente"}
    """
    success: bool = True
    id: Optional[str] = Field(default=None, description="Id generado (solo en creación)")
    message: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "id": "6650f0a1b2c3d4e5f6a7b8c9",
                "message": "Producto creado exitosamente",
            }
        }
    }


class InfoResponse(BaseModel):
    """Returned by GET /: liveness/info, no storage access."""
    status: str = "ok"
    message: str
    version: str


class PingResponse(BaseModel):
    """Returned by GET /api/ping when the database answered."""
    success: bool = True
    message: str
    timestamp: datetime


class PingErrorResponse(BaseModel):
    success: bool = False
    error: str


class ErrorResponse(BaseModel):
    """
    What:  Error format for all API errors.

    Fields:
        error: Human-readable description, safe to show to staff
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Descripción del error")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


# ══════════════════════════════════════════════════════════════════════════
# Document Serialization
# ══════════════════════════════════════════════════════════════════════════


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """ObjectIds (including `_id`) become hex strings; datetimes are left to FastAPI."""
    return serialize_value(document)


def serialize_documents(documents: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(doc) for doc in documents]
