from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from chamados_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class RegisteredUserEntity(EntityMixin):
    id: uuid.UUID
    first_name: str
    last_name: str
    whatsapp: str
    whatsapp_last4: str
    registered_at: datetime
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
