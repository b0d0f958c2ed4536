from collections.abc import Callable, Iterable

import structlog

from chamados_core.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)


class EventDispatcher:
    """
    Dispatcher de eventos de domínio.

    Falha de um assinante é registrada e não interrompe os demais.
    """
    def __init__(self) -> None:
        self._subs: dict[type[DomainEvent], list[Callable[[DomainEvent], None]]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        self._subs.setdefault(event_type, []).append(handler)
        logger.debug(
            "event.subscribed",
            event_type=event_type.__name__,
            handler_name=getattr(handler, "__name__", type(handler).__name__),
        )

    def subscribe_many(self, event_types: Iterable[type[DomainEvent]], handler: Callable[[DomainEvent], None]) -> None:
        for event_type in event_types:
            self.subscribe(event_type, handler)

    def dispatch(self, event: DomainEvent) -> None:
        handlers = self._subs.get(type(event), [])
        logger.info(
            "event.dispatch",
            event_name=type(event).__name__,
            listeners=len(handlers),
        )
        for h in handlers:
            try:
                h(event)
            except Exception as e:
                logger.error(
                    "event.handler_error",
                    event_name=type(event).__name__,
                    handler_name=getattr(h, "__name__", type(h).__name__),
                    error=str(e),
                    exc_info=True,
                )

    def dispatch_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.dispatch(event)
