from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from django.core.management.base import BaseCommand

from chamados_core.adapters.repositories.registered_user_repo_impl import RegisteredUserRepoImpl
from chamados_core.adapters.repositories.service_request_repo_impl import ServiceRequestRepoImpl
from chamados_core.adapters.utils.phone_utils import last4, normalize_phone
from chamados_core.core.domain.entities.payment_entity import PaymentEntity
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity
from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity

# ids determinísticos: rodar o comando de novo não duplica nada
SEED_NAMESPACE = uuid.UUID("6f1c3a52-52b8-4f0e-9d07-0c5e1a6b2f10")


def _seed_id(key: str) -> uuid.UUID:
    return uuid.uuid5(SEED_NAMESPACE, key)


def _dt(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


DEMO_USERS: list[dict[str, Any]] = [
    {"key": "joao", "first_name": "João", "last_name": "Silva",
     "whatsapp": "11987654321", "email": "joao@email.com", "registered_at": "2024-01-15"},
    {"key": "maria", "first_name": "Maria", "last_name": "Santos",
     "whatsapp": "11976543210", "email": "maria@email.com", "registered_at": "2024-02-10"},
]

DEMO_REQUESTS: list[dict[str, Any]] = [
    {
        "key": "torneira", "owner": "joao",
        "title": "Vazamento na torneira da cozinha",
        "description": "Torneira da pia da cozinha está pingando constantemente. Já tentei apertar, mas não resolve.",
        "priority": "medium", "category": "hydraulic",
        "location": "Apartamento 301 - Cozinha", "requester": "João Silva",
        "contact": "(11) 98765-4321", "status": "pending", "created_at": "2024-01-20",
    },
    {
        "key": "lampada", "owner": "maria",
        "title": "Lâmpada queimada no corredor",
        "description": "Lâmpada do corredor principal queimou. Necessário trocar por LED.",
        "priority": "low", "category": "electrical",
        "location": "Apartamento 205 - Corredor", "requester": "Maria Santos",
        "contact": "(11) 97654-3210", "status": "completed", "created_at": "2024-01-18",
        "scheduled_days": 2, "scheduled_date": "2024-01-20", "completed_at": "2024-01-20",
        "payment": {
            "amount": "45.00", "due_date": "2024-01-27", "is_paid": True,
            "paid_at": "2024-01-25", "payment_method": "pix", "notes": "Pagamento via PIX confirmado",
        },
    },
    {
        "key": "ar-condicionado", "owner": "carlos",
        "title": "Ar condicionado não liga",
        "description": "Ar condicionado do quarto não está ligando. Controle funciona mas o aparelho não responde.",
        "priority": "high", "category": "air-conditioning",
        "location": "Apartamento 102 - Quarto", "requester": "Carlos Oliveira",
        "contact": "(11) 95432-1098", "status": "scheduled", "created_at": "2024-01-19",
        "scheduled_days": 3, "scheduled_date": "2024-01-22",
    },
]


class Command(BaseCommand):
    """
    Popula a base com os cadastros e chamados de demonstração.
    Idempotente: registros já existentes são mantidos.
    """
    help = "Cria cadastros e chamados de demonstração."

    def handle(self, *args: Any, **opt: Any) -> None:
        self.stdout.write(self.style.NOTICE("--- Populando dados de demonstração ---"))
        user_repo = RegisteredUserRepoImpl()
        request_repo = ServiceRequestRepoImpl()

        created_users = 0
        owner_ids: dict[str, str] = {}
        for data in DEMO_USERS:
            whatsapp = normalize_phone(data["whatsapp"])
            existing = user_repo.find_by_whatsapp(whatsapp)
            if existing:
                owner_ids[data["key"]] = str(existing.id)
                continue
            user = user_repo.add(RegisteredUserEntity(
                id=_seed_id(data["key"]),
                first_name=data["first_name"],
                last_name=data["last_name"],
                whatsapp=whatsapp,
                whatsapp_last4=last4(whatsapp),
                registered_at=_dt(data["registered_at"]),
                email=data["email"],
            ))
            owner_ids[data["key"]] = str(user.id)
            created_users += 1

        created_requests = 0
        for data in DEMO_REQUESTS:
            request_id = _seed_id(data["key"])
            if request_repo.find_by_id(str(request_id)):
                continue
            payment = data.get("payment")
            request_repo.add(ServiceRequestEntity(
                id=request_id,
                user_id=owner_ids.get(data["owner"]) or str(_seed_id(data["owner"])),
                title=data["title"],
                description=data["description"],
                category=data["category"],
                location=data["location"],
                requester=data["requester"],
                contact=data["contact"],
                created_at=_dt(data["created_at"]),
                priority=data["priority"],
                status=data["status"],
                scheduled_days=data.get("scheduled_days"),
                scheduled_date=_dt(data["scheduled_date"]) if data.get("scheduled_date") else None,
                completed_at=_dt(data["completed_at"]) if data.get("completed_at") else None,
                payment=PaymentEntity(
                    amount=Decimal(payment["amount"]),
                    due_date=_dt(payment["due_date"]),
                    is_paid=payment["is_paid"],
                    paid_at=_dt(payment["paid_at"]),
                    payment_method=payment["payment_method"],
                    notes=payment["notes"],
                ) if payment else None,
            ))
            created_requests += 1

        self.stdout.write(self.style.SUCCESS(
            f"✅ {created_users} cadastro(s) e {created_requests} chamado(s) criados."
        ))
