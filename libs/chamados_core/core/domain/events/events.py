from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ╭──────────────────────────────────────────────╮
# │ 1. Chamados                                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class ServiceRequestCreatedEvent(DomainEvent):
    request_id: uuid.UUID
    user_id: str
    category: str
    priority: str


@dataclass(frozen=True)
class ServiceRequestUpdatedEvent(DomainEvent):
    request_id: uuid.UUID
    fields: tuple[str, ...]


@dataclass(frozen=True)
class ServiceRequestStatusChangedEvent(DomainEvent):
    request_id: uuid.UUID
    previous_status: str
    status: str


@dataclass(frozen=True)
class ServiceRequestDeletedEvent(DomainEvent):
    request_id: uuid.UUID


# ╭──────────────────────────────────────────────╮
# │ 2. Pagamentos                               │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class PaymentAttachedEvent(DomainEvent):
    request_id: uuid.UUID
    amount: Decimal
    due_date: datetime


@dataclass(frozen=True)
class PaymentReceivedEvent(DomainEvent):
    request_id: uuid.UUID
    amount: Decimal
    payment_method: str
    received_at: datetime


# ╭──────────────────────────────────────────────╮
# │ 3. Usuários                                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class UserRegisteredEvent(DomainEvent):
    user_id: uuid.UUID
    first_name: str


SERVICE_REQUEST_EVENTS: tuple[type[DomainEvent], ...] = (
    ServiceRequestCreatedEvent,
    ServiceRequestUpdatedEvent,
    ServiceRequestStatusChangedEvent,
    ServiceRequestDeletedEvent,
    PaymentAttachedEvent,
    PaymentReceivedEvent,
)
