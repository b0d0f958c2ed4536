from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from chamados_core.core.domain.entities._base import EntityMixin
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity

Role = Literal["client", "planner"]

PLANNER_ID = "planner"


@dataclass(frozen=True, slots=True)
class SessionUser(EntityMixin):
    """
    Identidade autenticada de uma sessão.

    O planejador é um papel privilegiado único (id fixo), sem vínculo com
    um cadastro de `RegisteredUser`.
    """
    id: str
    first_name: str
    full_name: str
    role: Role = "client"
    whatsapp_last4: str | None = None

    def __post_init__(self):
        if self.role not in ("client", "planner"):
            raise ValueError(f"Role inválida: {self.role}")

    @property
    def is_planner(self) -> bool:
        return self.role == "planner"

    # compatibilidade com DRF (request.user)
    @property
    def is_authenticated(self) -> bool:
        return True

    @classmethod
    def for_client(cls, user: RegisteredUserEntity) -> SessionUser:
        return cls(
            id=str(user.id),
            first_name=user.first_name,
            full_name=user.full_name,
            role="client",
            whatsapp_last4=user.whatsapp_last4,
        )

    @classmethod
    def for_planner(cls, display_name: str) -> SessionUser:
        return cls(
            id=PLANNER_ID,
            first_name=display_name,
            full_name=f"{display_name} CGPL",
            role="planner",
        )

    def to_claims(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "full_name": self.full_name,
            "role": self.role,
            "whatsapp_last4": self.whatsapp_last4,
        }
