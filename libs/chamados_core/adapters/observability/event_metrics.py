from chamados_core.adapters.observability.metrics import (
    PAYMENTS_ATTACHED,
    PAYMENTS_RECEIVED,
    SERVICE_REQUESTS_CREATED,
    STATUS_TRANSITIONS,
    USERS_REGISTERED,
)
from chamados_core.core.domain.events.events import (
    DomainEvent,
    PaymentAttachedEvent,
    PaymentReceivedEvent,
    ServiceRequestCreatedEvent,
    ServiceRequestStatusChangedEvent,
    UserRegisteredEvent,
)
from chamados_core.core.domain.services.event_dispatcher import EventDispatcher


def record_event_metrics(event: DomainEvent) -> None:
    if isinstance(event, ServiceRequestCreatedEvent):
        SERVICE_REQUESTS_CREATED.labels(category=event.category, priority=event.priority).inc()
    elif isinstance(event, ServiceRequestStatusChangedEvent):
        STATUS_TRANSITIONS.labels(from_status=event.previous_status, to_status=event.status).inc()
    elif isinstance(event, PaymentAttachedEvent):
        PAYMENTS_ATTACHED.inc()
    elif isinstance(event, PaymentReceivedEvent):
        PAYMENTS_RECEIVED.labels(payment_method=event.payment_method).inc()
    elif isinstance(event, UserRegisteredEvent):
        USERS_REGISTERED.inc()


def subscribe_event_metrics(dispatcher: EventDispatcher) -> None:
    dispatcher.subscribe_many(
        (
            ServiceRequestCreatedEvent,
            ServiceRequestStatusChangedEvent,
            PaymentAttachedEvent,
            PaymentReceivedEvent,
            UserRegisteredEvent,
        ),
        record_event_metrics,
    )
