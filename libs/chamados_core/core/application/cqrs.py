from __future__ import annotations

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

# ───────────────────────────────────────────────
# CQRS com paginação e log de performance
# ───────────────────────────────────────────────

C = TypeVar('C')  # Command type
Q = TypeVar('Q')  # Query filtros type
R = TypeVar('R')  # Query result type
T = TypeVar('T')  # PagedResult item type

logger = structlog.get_logger(__name__)


# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base para todos comandos de escrita (Create/Update/Delete)."""
    pass


@dataclass(frozen=True, kw_only=True)
class QueryDTO(Generic[Q]):
    """Base para consultas de leitura."""
    filtros: Q | None = None


@dataclass(frozen=True, kw_only=True)
class PaginatedQueryDTO(QueryDTO[Q]):
    """Consulta paginada: filtros + paginação."""
    page: int = 1
    page_size: int = 50


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """Resultado paginado padrão."""
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'total_pages', math.ceil(self.total / self.page_size) if self.page_size else 0)


# ───────────────────────────────────────────────
# Handlers Protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any:
        """Processa um comando e aplica mudanças de estado."""
        ...


class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: QueryDTO[Q]) -> R:
        """Processa uma consulta e retorna um resultado."""
        ...


# ───────────────────────────────────────────────
# Buses com logging
# ───────────────────────────────────────────────
class _Bus:
    """
    Registro tipo → handler e execução cronometrada.

    Falhas de domínio (NotFound, ValidationError, ...) são registradas em
    WARNING e repropagadas sem alteração para a camada HTTP traduzir.
    """
    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        if message_type in self._handlers:
            logger.warning(f"cqrs.{self.kind}.handler_replaced", name=message_type.__name__)
        self._handlers[message_type] = handler
        logger.debug(f"cqrs.{self.kind}.registered", name=message_type.__name__)

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise LookupError(f"Nenhum handler registrado para {self.kind} {name}")

        start = time.perf_counter()
        try:
            result = handler.handle(message)
        except Exception as e:
            logger.warning(
                f"cqrs.{self.kind}.failed",
                name=name,
                error_type=type(e).__name__,
                error=str(e),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        logger.info(
            f"cqrs.{self.kind}.executed",
            name=name,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return result


class CommandBus(_Bus):
    """Comandos de escrita (abertura, transição, baixa, cadastro)."""
    kind = "command"

    def register(self, command_type: type[C], handler: CommandHandler[C]) -> None:
        super().register(command_type, handler)


class QueryBus(_Bus):
    """Consultas de leitura, incluindo as paginadas (PagedResult)."""
    kind = "query"

    def register(self, query_type: type[QueryDTO], handler: QueryHandler[Any, Any]) -> None:
        super().register(query_type, handler)
