"""
Feed de alterações dos chamados.

Cada evento de chamado vira um aviso "algo mudou" no grupo Channels
`service_requests`. Os clientes conectados recarregam a coleção completa e
recalculam os indicadores; não há diff incremental.
"""
from __future__ import annotations

import structlog
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from chamados_core.adapters.observability.metrics import CHANGE_NOTIFICATIONS
from chamados_core.core.domain.events.events import SERVICE_REQUEST_EVENTS, DomainEvent
from chamados_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

SERVICE_REQUESTS_GROUP = "service_requests"
CHANGED_MESSAGE_TYPE = "service_requests.changed"


def build_change_message(event: DomainEvent) -> dict:
    return {
        "type": CHANGED_MESSAGE_TYPE,
        "event": type(event).__name__,
        "request_id": str(getattr(event, "request_id", "")),
        "occurred_at": event.occurred_at.isoformat(),
    }


class ServiceRequestChangeNotifier:
    def __init__(self, group: str = SERVICE_REQUESTS_GROUP, channel_layer=None):
        self.group = group
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        return self._channel_layer or get_channel_layer()

    def __call__(self, event: DomainEvent) -> None:
        layer = self.channel_layer
        if layer is None:
            logger.debug("change_feed.no_layer", event_name=type(event).__name__)
            return
        message = build_change_message(event)
        async_to_sync(layer.group_send)(self.group, message)
        CHANGE_NOTIFICATIONS.labels(event=message["event"]).inc()
        logger.debug(
            "change_feed.notified",
            group=self.group,
            event_name=message["event"],
            request_id=message["request_id"],
        )

    def subscribe_to(self, dispatcher: EventDispatcher) -> None:
        dispatcher.subscribe_many(SERVICE_REQUEST_EVENTS, self)
