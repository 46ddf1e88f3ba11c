"""
Bahía Escondida Cashless — Custom Exception Hierarchy
=======================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the right HTTP status code.
Who:   Raised by services and the storage adapter; caught by global handlers.

Exception Hierarchy:
    CashlessError (base)
    ├── ValidationError            → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    ├── DatabaseError              → 500 Internal Server Error
    └── DatabaseUnavailableError   → 500 Internal Server Error (degraded mode)

Response shape:
    {"error": "<message>", "request_id": "<id>"}
    `message` is always safe to return; `context` is logged server-side only.
"""

from typing import Any, Dict, Optional


class CashlessError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Ocurrió un error inesperado",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CashlessError):
    """
    Raised when client input fails a business rule.

    When:    Request body is not a JSON object, transaction without huespedId.
    HTTP:    400 Bad Request

    Schema-level errors on typed bodies (products) are reported by FastAPI
    itself with 422.
    """

    def __init__(
        self,
        message: str = "Datos inválidos",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CashlessError):
    """
    Raised when a requested document does not exist.

    When:    Point lookup returned None, update/soft-delete matched zero
             documents, or the path id is not a valid ObjectId.
    HTTP:    404 Not Found

    Example:
        NotFoundError("Huésped", "64f0c0ffee...") → "Huésped no encontrado"
    """

    def __init__(
        self,
        resource: str = "Recurso",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} no encontrado", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CashlessError):
    """
    Raised when a storage operation fails.

    When:    Network error, timeout, driver error while talking to MongoDB.
    HTTP:    500 Internal Server Error

    The message is the generic per-operation text ("Error al obtener
    huéspedes"); the driver error goes into `context` and the server log only.
    """

    def __init__(
        self,
        message: str = "Error en la base de datos",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseUnavailableError(DatabaseError):
    """
    Raised when a data operation is attempted without a database connection.

    When:    MONGODB_URI was empty, the startup connection failed, or the
             adapter has already been closed.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Base de datos no disponible: MongoDB no está conectado",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
