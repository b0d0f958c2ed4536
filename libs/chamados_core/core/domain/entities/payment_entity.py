from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from chamados_core.core.domain.entities._base import EntityMixin

PaymentMethod = Literal["pix", "cash", "card", "transfer", "boleto"]
PAYMENT_METHODS: tuple[str, ...] = ("pix", "cash", "card", "transfer", "boleto")


@dataclass(slots=True)
class PaymentEntity(EntityMixin):
    """Cobrança anexada a um chamado concluído."""

    amount: Decimal
    due_date: datetime
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_method: PaymentMethod | None = None
    notes: str | None = None

    def is_past_due(self, now: datetime) -> bool:
        return not self.is_paid and self.due_date < now
