"""
Dados de referência fixos (categorias de serviço e rótulos de exibição).

Consumidos pela API e pelos validadores; nunca persistidos.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServiceCategory:
    id: str
    name: str
    icon: str
    description: str


FALLBACK_CATEGORY_ID = "other"

# ╭──────────────────────────────────────────────╮
# │ Categorias de serviço                       │
# ╰──────────────────────────────────────────────╯
SERVICE_CATEGORIES: dict[str, ServiceCategory] = {
    c.id: c
    for c in (
        ServiceCategory("hydraulic", "Hidráulica", "Wrench", "Reparos em encanamentos, torneiras, válvulas"),
        ServiceCategory("electrical", "Elétrica", "Zap", "Instalações elétricas, tomadas, iluminação"),
        ServiceCategory("air-conditioning", "Ar Condicionado", "Wind", "Manutenção e reparo de sistemas de climatização"),
        ServiceCategory("cleaning", "Limpeza", "Sparkles", "Limpeza profunda, manutenção de áreas comuns"),
        ServiceCategory("carpentry", "Carpintaria", "Hammer", "Reparos em portas, janelas, móveis"),
        ServiceCategory("painting", "Pintura", "Brush", "Pintura de paredes, retoques, acabamentos"),
        ServiceCategory("security", "Segurança", "Shield", "Fechaduras, portões, sistemas de segurança"),
        ServiceCategory("gardening", "Jardinagem", "TreePine", "Manutenção de jardins e áreas verdes"),
        ServiceCategory(FALLBACK_CATEGORY_ID, "Outros", "Settings", "Outros serviços não listados"),
    )
}

# ╭──────────────────────────────────────────────╮
# │ Rótulos                                     │
# ╰──────────────────────────────────────────────╯
STATUS_LABELS: dict[str, str] = {
    "pending": "Pendente",
    "scheduled": "Agendado",
    "in-progress": "Em Andamento",
    "completed": "Concluído",
}

PRIORITY_LABELS: dict[str, str] = {
    "low": "Baixa",
    "medium": "Média",
    "high": "Alta",
    "urgent": "Urgente",
}

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "pix": "PIX",
    "cash": "Dinheiro",
    "card": "Cartão",
    "transfer": "Transferência",
    "boleto": "Boleto",
}


def get_category(category_id: str | None) -> ServiceCategory:
    """Ids desconhecidos caem sempre na categoria "other"."""
    return SERVICE_CATEGORIES.get(category_id or "", SERVICE_CATEGORIES[FALLBACK_CATEGORY_ID])


def is_known_category(category_id: str | None) -> bool:
    return category_id in SERVICE_CATEGORIES
