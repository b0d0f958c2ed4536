from __future__ import annotations

import functools
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from django.db import DatabaseError

from chamados_core.core.domain.events.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_store_errors(func: F) -> F:
    """
    Converte falhas do banco (conexão, timeout, SQL) em StoreUnavailable.
    Uma única tentativa; o erro original segue encadeado.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(
                "store.unavailable",
                operation=func.__qualname__,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise StoreUnavailable("Armazenamento indisponível, tente novamente mais tarde") from exc

    return wrapper  # type: ignore[return-value]


def as_uuid(value: Any) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None
