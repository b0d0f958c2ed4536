from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity


@dataclass(slots=True)
class StatsAccumulator:
    total: int = 0
    pending: int = 0
    scheduled: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0
    total_revenue: Decimal = Decimal("0.00")
    pending_payments: int = 0


@dataclass(slots=True)
class PaymentBucket:
    amount: Decimal = Decimal("0.00")
    request_ids: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.request_ids)

    def add(self, request: ServiceRequestEntity) -> None:
        self.amount += request.payment.amount
        self.request_ids.append(str(request.id))


def aggregate_stats(requests: Iterable[ServiceRequestEntity], now: datetime) -> StatsAccumulator:
    """
    Passada única sobre a coleção completa.

    `overdue` soma duas causas independentes (agendamento vencido e
    cobrança vencida) sem distinguir entre elas.
    """
    acc = StatsAccumulator()
    for r in requests:
        acc.total += 1
        if r.status == "pending":
            acc.pending += 1
        elif r.status == "scheduled":
            acc.scheduled += 1
            if r.scheduled_date is not None and r.scheduled_date < now:
                acc.overdue += 1
        elif r.status == "in-progress":
            acc.in_progress += 1
        elif r.status == "completed":
            acc.completed += 1
            if r.payment is not None:
                acc.total_revenue += r.payment.amount
                if not r.payment.is_paid:
                    acc.pending_payments += 1
                    if r.payment.due_date < now:
                        acc.overdue += 1
    return acc


def aggregate_payments(
    requests: Iterable[ServiceRequestEntity], now: datetime
) -> tuple[PaymentBucket, PaymentBucket, PaymentBucket]:
    """Retorna (pagos, pendentes, vencidos) entre os chamados concluídos com cobrança."""
    paid, pending, overdue = PaymentBucket(), PaymentBucket(), PaymentBucket()
    for r in requests:
        if r.status != "completed" or r.payment is None:
            continue
        if r.payment.is_paid:
            paid.add(r)
            continue
        pending.add(r)
        if r.payment.due_date < now:
            overdue.add(r)
    return paid, pending, overdue
