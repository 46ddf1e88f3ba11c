"""
Bahía Escondida Cashless — Storage Adapter
============================================

What:  Owns the single MongoDB client and hands out the three named collections.
How:   A `Database` service object is built once in the application lifespan,
       stored on `app.state.database`, and injected into route handlers via
       the `get_database` FastAPI dependency.
Who:   Used by services (one storage call per request) and the seed initializer.
When:  Connected at startup, closed at shutdown; collection handles are looked
       up per request and never cached by handlers.

State Machine:
    UNINITIALIZED ──connect()──▶ CONNECTED ──close()──▶ CLOSED
          │                                               ▲
          └──connect() (no URI / ping failed)──▶ DEGRADED ─┘ close()

    Only CONNECTED serves data. Every other state raises
    DatabaseUnavailableError from `collection()` and `ping()`, which the global
    handler turns into a 500 naming the unavailable database.

Connection Pooling:
    The async pymongo client pools connections itself and is safe for
    concurrent use by all in-flight requests; the adapter never serializes
    access. `timeoutMS` bounds every operation issued through the client.
"""

import enum
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError, PyMongoError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.config import mask_uri, settings
from app.exceptions import DatabaseError, DatabaseUnavailableError

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
HUESPEDES = "huespedes"
TRANSACCIONES = "transacciones"
PRODUCTOS = "productos"

COLLECTIONS = frozenset({HUESPEDES, TRANSACCIONES, PRODUCTOS})


class DatabaseState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    DEGRADED = "degraded"
    CLOSED = "closed"


ClientFactory = Callable[..., Any]


class Database:
    """
    Storage adapter around one `AsyncMongoClient`.

    Args:
        uri:          MongoDB connection string; empty → degraded mode
        db_name:      Database holding the three collections
        client_factory: Callable building the client (defaults to AsyncMongoClient)
        connect_attempts / connect_min_wait / connect_max_wait:
                      Tenacity settings for the startup connect + ping
        client_options: Extra keyword arguments for the client
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: ClientFactory = AsyncMongoClient,
        connect_attempts: int = 1,
        connect_min_wait: float = 0.0,
        connect_max_wait: float = 0.0,
        client_options: Optional[Dict[str, Any]] = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self._client_factory = client_factory
        self._connect_attempts = connect_attempts
        self._connect_min_wait = connect_min_wait
        self._connect_max_wait = connect_max_wait
        self._client_options = client_options or {}
        self._client: Optional[Any] = None
        self._db: Optional[AsyncDatabase] = None
        self.state = DatabaseState.UNINITIALIZED

    @classmethod
    def from_settings(cls) -> "Database":
        """Builds the adapter from the application settings singleton."""
        return cls(
            uri=settings.mongodb_uri,
            db_name=settings.db_name,
            connect_attempts=settings.db_connect_attempts,
            connect_min_wait=settings.db_connect_min_wait,
            connect_max_wait=settings.db_connect_max_wait,
            client_options={
                "serverSelectionTimeoutMS": settings.db_server_selection_timeout_ms,
                "timeoutMS": settings.db_operation_timeout_ms,
                "maxPoolSize": settings.db_max_pool_size,
                "tz_aware": True,
                "appname": "bahia-cashless-api",
            },
        )

    @property
    def is_connected(self) -> bool:
        return self.state is DatabaseState.CONNECTED

    @property
    def masked_uri(self) -> str:
        return mask_uri(self.uri)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def connect(self) -> bool:
        """
        Establishes the shared connection and verifies it with a ping.

        Never raises: a missing URI or a connection that still fails after
        all attempts leaves the adapter DEGRADED and returns False.

        Returns:
            True when the adapter ended up CONNECTED.
        """
        if not self.uri:
            logger.warning(
                "MONGODB_URI no configurado. El servidor iniciará sin base de datos."
            )
            self.state = DatabaseState.DEGRADED
            return False

        logger.info("Conectando a MongoDB...")
        logger.info("URI: %s", self.masked_uri)

        try:
            async for attempt in AsyncRetrying(
                # Bad URIs and bad options do not heal by retrying
                retry=(
                    retry_if_exception_type(PyMongoError)
                    & retry_if_not_exception_type(ConfigurationError)
                ),
                stop=stop_after_attempt(self._connect_attempts),
                wait=wait_exponential_jitter(
                    multiplier=self._connect_min_wait,
                    max=self._connect_max_wait,
                    jitter=self._connect_min_wait,
                ),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    await self._open()
        except PyMongoError as e:
            logger.error("Error conectando a MongoDB: %s", str(e))
            self._log_troubleshooting_hints()
            self.state = DatabaseState.DEGRADED
            return False

        self.state = DatabaseState.CONNECTED
        logger.info("Conectado a MongoDB (base de datos: %s)", self.db_name)
        return True

    async def _open(self) -> None:
        """One connect + ping attempt; discards the client if the ping fails."""
        client = self._client_factory(self.uri, **self._client_options)
        try:
            db = client[self.db_name]
            await db.command("ping")
        except BaseException:
            await client.close()
            raise
        self._client = client
        self._db = db

    async def close(self) -> None:
        """Releases the client. Safe to call repeatedly and in any state."""
        client, self._client, self._db = self._client, None, None
        self.state = DatabaseState.CLOSED
        if client is not None:
            await client.close()
            logger.info("Conexión a MongoDB cerrada")

    # ── Operations ────────────────────────────────────────────────────────

    async def ping(self) -> None:
        """
        Lightweight liveness check against the server.

        Raises:
            DatabaseUnavailableError: adapter is not connected
            DatabaseError: the ping command failed
        """
        db = self._require_db()
        try:
            await db.command("ping")
        except PyMongoError as e:
            logger.warning("Ping a MongoDB falló: %s", str(e))
            raise DatabaseError(
                message="Error de conexión a MongoDB",
                context={"error_type": type(e).__name__},
            )

    def collection(self, name: str) -> AsyncCollection:
        """
        Returns the handle for one of the three named collections.

        Does not create or validate any schema.

        Raises:
            ValueError: `name` is not one of huespedes/transacciones/productos
            DatabaseUnavailableError: adapter is not connected
        """
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{name}'. Must be one of: {sorted(COLLECTIONS)}")
        return self._require_db()[name]

    def _require_db(self) -> AsyncDatabase:
        if self.state is not DatabaseState.CONNECTED or self._db is None:
            raise DatabaseUnavailableError(context={"state": self.state.value})
        return self._db

    @staticmethod
    def _log_troubleshooting_hints() -> None:
        logger.warning("Posibles soluciones:")
        logger.warning("  1. Verifica en MongoDB Atlas > Security > Network Access (0.0.0.0/0)")
        logger.warning("  2. Verifica tu firewall/antivirus")
        logger.warning("  3. Intenta desde otra red")
        logger.warning("El servidor arrancará SIN MongoDB (modo degradado)")


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the adapter owned by the application.

    Example usage in a route:
        @router.get("/huespedes")
        async def list_huespedes(db: Database = Depends(get_database)):
            return await huesped_service.list_huespedes(db)

    Raises:
        DatabaseUnavailableError: lifespan never created an adapter
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseUnavailableError(context={"state": "missing"})
    return database
