"""
Bahía Escondida Cashless — Shared Service Helpers
===================================================

What:  Id parsing, server timestamps, body cleaning and storage error mapping
       shared by the guest, transaction and product services.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from app.exceptions import DatabaseError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a `Z` suffix, e.g. 2024-01-15T12:00:00.000Z."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_object_id(value: str, resource: str) -> ObjectId:
    """
    Converts a path parameter into an ObjectId.

    A malformed id can never match a document, so it is reported exactly like
    a missing one instead of surfacing the driver's InvalidId.

    Raises:
        NotFoundError: `value` is not a 24-char hex ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(resource=resource, resource_id=value, context={"reason": "invalid_id"})


def clean_body(body: Any, drop: Iterable[str] = ("_id",)) -> Dict[str, Any]:
    """
    Validates a schema-less request body and removes server-managed keys.

    Raises:
        ValidationError: body is not a JSON object, or has operator keys ($set, ...)
    """
    if not isinstance(body, Mapping):
        raise ValidationError(message="El cuerpo de la solicitud debe ser un objeto JSON")

    dropped = set(drop)
    cleaned: Dict[str, Any] = {}
    for key, value in body.items():
        if key in dropped:
            continue
        if not isinstance(key, str) or key.startswith("$"):
            raise ValidationError(message=f"Campo no permitido: {key}", field=str(key))
        cleaned[key] = value
    return cleaned


@contextmanager
def storage_errors(message: str, **context: Any) -> Iterator[None]:
    """
    Scopes one storage call: driver errors become DatabaseError(message).

    The driver error is logged here and kept out of the response body.
    """
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s | Context: %s", message, str(e), context)
        raise DatabaseError(
            message=message,
            context={**context, "error_type": type(e).__name__},
        ) from e
