from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from chamados_core.core.domain.entities._base import EntityMixin
from chamados_core.core.domain.entities.payment_entity import PaymentEntity

Priority = Literal["low", "medium", "high", "urgent"]
Status = Literal["pending", "scheduled", "in-progress", "completed"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")
STATUSES: tuple[str, ...] = ("pending", "scheduled", "in-progress", "completed")


@dataclass(slots=True)
class ServiceRequestEntity(EntityMixin):
    id: uuid.UUID
    user_id: str
    title: str
    description: str
    category: str
    location: str
    requester: str
    contact: str
    created_at: datetime
    priority: Priority = "medium"
    status: Status = "pending"
    scheduled_days: int | None = None
    scheduled_date: datetime | None = None
    completed_at: datetime | None = None
    payment: PaymentEntity | None = None
    updated_at: datetime | None = None

    _model_exclude = ("payment",)

    def __post_init__(self):
        if self.status not in STATUSES:
            raise ValueError(f"Status inválido: {self.status}")
        if self.priority not in PRIORITIES:
            raise ValueError(f"Prioridade inválida: {self.priority}")

    @property
    def has_payment(self) -> bool:
        return self.payment is not None

    @classmethod
    def from_model(cls, model: Any) -> ServiceRequestEntity:
        """
        O pagamento fica achatado em colunas irmãs (payment_*) na tabela;
        `payment_amount` nulo significa que não há cobrança.
        """
        entity = super(ServiceRequestEntity, cls).from_model(model)
        if model.payment_amount is not None:
            entity.payment = PaymentEntity(
                amount=model.payment_amount,
                due_date=model.payment_due_date,
                is_paid=model.payment_is_paid,
                paid_at=model.payment_paid_at,
                payment_method=model.payment_method or None,
                notes=model.payment_notes or None,
            )
        return entity

    def to_model_fields(self) -> dict[str, Any]:
        data = self.to_dict()
        data.pop("payment")
        data.pop("updated_at")
        p = self.payment
        data.update(
            payment_amount=p.amount if p else None,
            payment_due_date=p.due_date if p else None,
            payment_is_paid=p.is_paid if p else False,
            payment_paid_at=p.paid_at if p else None,
            payment_method=p.payment_method if p else None,
            payment_notes=p.notes if p else None,
        )
        return data
