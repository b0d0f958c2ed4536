from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from chamados_core.core.domain.reference_data import SERVICE_CATEGORIES, is_known_category

PriorityField = Literal["low", "medium", "high", "urgent"]
StatusField = Literal["pending", "scheduled", "in-progress", "completed"]


def _required_text(value: str | None, label: str) -> str:
    value = str(value or "").strip()
    if not value:
        raise ValueError(f"{label} é obrigatório")
    return value


class CreateServiceRequestDTO(BaseModel):
    """
    Entrada do formulário de abertura de chamado.

    `status` e `payment` são aceitos e descartados: todo chamado nasce
    pendente e sem cobrança.
    """
    title: str
    description: str
    category: str
    location: str
    priority: PriorityField = "medium"
    contact: str | None = None
    requester: str | None = None
    status: Any = None
    payment: Any = None

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def _strip_required(cls, v, info):
        return _required_text(v, info.field_name)

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, v):
        v = str(v or "").strip()
        if not v:
            raise ValueError("category é obrigatório")
        if not is_known_category(v):
            raise ValueError(f"categoria desconhecida: {v} (válidas: {', '.join(SERVICE_CATEGORIES)})")
        return v

    @field_validator("contact", "requester", mode="before")
    @classmethod
    def _strip_optional(cls, v):
        return str(v or "").strip() or None


class UpdateServiceRequestDTO(BaseModel):
    """Campos descritivos editáveis pelo planejador. Status só muda via transição."""
    title: str | None = None
    description: str | None = None
    category: str | None = None
    location: str | None = None
    contact: str | None = None
    priority: PriorityField | None = None

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def _not_blank(cls, v, info):
        if v is None:
            return v
        return _required_text(v, info.field_name)

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, v):
        if v is not None and not is_known_category(v):
            raise ValueError(f"categoria desconhecida: {v}")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TransitionServiceRequestDTO(BaseModel):
    status: StatusField
    scheduled_days: int | None = Field(default=None, ge=1)
    payment_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    payment_notes: str | None = None


class MarkPaymentPaidDTO(BaseModel):
    """O método é validado pelo domínio (PaymentMethodRequired)."""
    payment_method: str | None = None
    notes: str | None = None

    @field_validator("payment_method", mode="before")
    @classmethod
    def _normalize(cls, v):
        return str(v or "").strip().lower() or None
