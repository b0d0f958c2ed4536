"""
Máquina de estados do chamado e da cobrança anexada.

    pending ──▶ scheduled ──▶ in-progress ──▶ completed
       └───────────┴──────────────┴──────────────▲

Somente avanços são permitidos (pular etapas é válido, voltar não).
`scheduled → scheduled` é o reagendamento: a nova data é calculada no
momento da chamada e congelada. A cobrança segue `unpaid → paid`, uma única vez.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

import structlog

from chamados_core.core.domain.entities.payment_entity import PAYMENT_METHODS, PaymentEntity
from chamados_core.core.domain.entities.service_request_entity import STATUSES, ServiceRequestEntity
from chamados_core.core.domain.events.events import (
    DomainEvent,
    PaymentAttachedEvent,
    PaymentReceivedEvent,
    ServiceRequestStatusChangedEvent,
)
from chamados_core.core.domain.events.exceptions import (
    InvalidTransition,
    NoPaymentAttached,
    PaymentMethodRequired,
    ValidationError,
)

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"scheduled", "in-progress", "completed"}),
    "scheduled": frozenset({"scheduled", "in-progress", "completed"}),
    "in-progress": frozenset({"completed"}),
    "completed": frozenset(),
}


@dataclass(frozen=True, slots=True)
class LifecyclePolicy:
    default_scheduled_days: int = 3
    payment_term_days: int = 7


DEFAULT_POLICY = LifecyclePolicy()


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    if target not in STATUSES:
        raise ValidationError(f"Status inválido: {target}", field="status")
    if not can_transition(current, target):
        raise InvalidTransition(current, target)


def ensure_payment_method(payment_method: str | None) -> None:
    if not payment_method or payment_method not in PAYMENT_METHODS:
        raise PaymentMethodRequired()


def to_money(value: Decimal | float | int | str) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def transition(  # noqa: PLR0913
    request: ServiceRequestEntity,
    target: str,
    *,
    now: datetime,
    scheduled_days: int | None = None,
    payment_amount: Decimal | None = None,
    payment_notes: str | None = None,
    policy: LifecyclePolicy = DEFAULT_POLICY,
) -> list[DomainEvent]:
    """
    Aplica a transição `request.status → target` e devolve os eventos gerados.

    Toda validação acontece antes de qualquer mutação na entidade.
    """
    ensure_transition(request.status, target)

    days: int | None = None
    if target == "scheduled":
        days = scheduled_days if scheduled_days is not None else (request.scheduled_days or policy.default_scheduled_days)
        if days < 1:
            raise ValidationError("O prazo deve ser de pelo menos 1 dia", field="scheduled_days")

    amount: Decimal | None = None
    if target == "completed" and payment_amount is not None:
        amount = to_money(payment_amount)
        if amount < 0:
            raise ValidationError("O valor do serviço não pode ser negativo", field="payment_amount")

    previous = request.status
    events: list[DomainEvent] = []

    if days is not None:
        request.scheduled_days = days
        request.scheduled_date = now + timedelta(days=days)

    if target == "completed":
        request.completed_at = now
        if amount is not None and amount > 0:
            request.payment = PaymentEntity(
                amount=amount,
                due_date=now + timedelta(days=policy.payment_term_days),
                is_paid=False,
                notes=payment_notes or None,
            )
            events.append(
                PaymentAttachedEvent(
                    request_id=request.id,
                    amount=amount,
                    due_date=request.payment.due_date,
                )
            )

    request.status = target
    events.insert(
        0,
        ServiceRequestStatusChangedEvent(request_id=request.id, previous_status=previous, status=target),
    )
    logger.info(
        "service_request.transitioned",
        request_id=str(request.id),
        previous_status=previous,
        status=target,
        scheduled_date=request.scheduled_date.isoformat() if request.scheduled_date else None,
        has_payment=request.has_payment,
    )
    return events


def mark_paid(
    request: ServiceRequestEntity,
    payment_method: str | None,
    *,
    now: datetime,
    notes: str | None = None,
) -> list[DomainEvent]:
    """
    Dá baixa na cobrança. Uma segunda baixa não altera `is_paid`,
    `paid_at` nem `payment_method` e não gera evento.
    """
    ensure_payment_method(payment_method)
    if request.payment is None:
        raise NoPaymentAttached(f"Chamado {request.id} não possui cobrança")

    payment = request.payment
    if payment.is_paid:
        logger.warning(
            "payment.already_paid",
            request_id=str(request.id),
            paid_at=payment.paid_at.isoformat() if payment.paid_at else None,
        )
        return []

    payment.is_paid = True
    payment.paid_at = now
    payment.payment_method = payment_method
    if notes is not None:
        payment.notes = notes or None

    logger.info(
        "payment.marked_paid",
        request_id=str(request.id),
        amount=str(payment.amount),
        payment_method=payment_method,
    )
    return [
        PaymentReceivedEvent(
            request_id=request.id,
            amount=payment.amount,
            payment_method=payment_method,
            received_at=now,
        )
    ]


# ───────────────────────────────────────────────
# Condições derivadas (calculadas na leitura)
# ───────────────────────────────────────────────
def is_schedule_late(request: ServiceRequestEntity, now: datetime) -> bool:
    return (
        request.scheduled_date is not None
        and request.scheduled_date < now
        and request.status != "completed"
    )


def is_payment_overdue(request: ServiceRequestEntity, now: datetime) -> bool:
    return request.payment is not None and request.payment.is_past_due(now)


def is_overdue(request: ServiceRequestEntity, now: datetime) -> bool:
    scheduled_late = (
        request.status == "scheduled"
        and request.scheduled_date is not None
        and request.scheduled_date < now
    )
    return scheduled_late or is_payment_overdue(request, now)
