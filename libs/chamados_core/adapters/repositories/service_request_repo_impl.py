from __future__ import annotations

from typing import Any

import structlog
from django.db import transaction
from django.db.models import Q

from chamados_core.adapters.repositories.store_errors import as_uuid, translate_store_errors
from chamados_core.core.application.cqrs import PagedResult
from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity
from chamados_core.core.domain.events.exceptions import InvalidTransition, NotFound
from chamados_core.core.domain.repositories.service_request_repository import ServiceRequestRepository
from plugins.django_interface.models import ServiceRequest as ServiceRequestModel

logger = structlog.get_logger(__name__)

# campos aceitos em update(); id, user_id e created_at são imutáveis
_MUTABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "location",
        "requester",
        "contact",
        "priority",
        "status",
        "scheduled_days",
        "scheduled_date",
        "completed_at",
        "payment_amount",
        "payment_due_date",
        "payment_is_paid",
        "payment_paid_at",
        "payment_method",
        "payment_notes",
    }
)


class ServiceRequestRepoImpl(ServiceRequestRepository):
    """
    Implementação Django do repositório de chamados.

    A ordem padrão é a do model (`-created_at`). A cobrança vive nas
    colunas payment_* da própria tabela.
    """

    # ────────────────────────── consultas ──────────────────────────
    @translate_store_errors
    def find_by_id(self, request_id: str) -> ServiceRequestEntity | None:
        pk = as_uuid(request_id)
        if pk is None:
            return None
        model = ServiceRequestModel.objects.filter(id=pk).first()
        return ServiceRequestEntity.from_model(model) if model else None

    @translate_store_errors
    def find_all(self) -> list[ServiceRequestEntity]:
        return [ServiceRequestEntity.from_model(m) for m in ServiceRequestModel.objects.all()]

    @translate_store_errors
    def find_by_owner(self, user_id: str) -> list[ServiceRequestEntity]:
        qs = ServiceRequestModel.objects.filter(user_id=str(user_id))
        return [ServiceRequestEntity.from_model(m) for m in qs]

    @translate_store_errors
    def find_by_status(self, status: str) -> list[ServiceRequestEntity]:
        qs = ServiceRequestModel.objects.filter(status=status)
        return [ServiceRequestEntity.from_model(m) for m in qs]

    # ─────────────────────── persistência ───────────────────────
    @translate_store_errors
    def add(self, entity: ServiceRequestEntity) -> ServiceRequestEntity:
        model = ServiceRequestModel.objects.create(**entity.to_model_fields())
        return ServiceRequestEntity.from_model(model)

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: ServiceRequestEntity, expected_status: str | None = None) -> ServiceRequestEntity:
        model = ServiceRequestModel.objects.select_for_update().filter(id=entity.id).first()
        if model is None:
            raise NotFound("ServiceRequest", entity.id)
        # outra escrita mudou o status depois da leitura
        if expected_status is not None and model.status != expected_status:
            logger.warning(
                "service_request.stale_write",
                request_id=str(entity.id),
                expected=expected_status,
                stored=model.status,
                target=entity.status,
            )
            raise InvalidTransition(model.status, entity.status)
        fields = entity.to_model_fields()
        for name in _MUTABLE_FIELDS:
            setattr(model, name, fields[name])
        model.save(update_fields=[*_MUTABLE_FIELDS, "updated_at"])
        return ServiceRequestEntity.from_model(model)

    @translate_store_errors
    @transaction.atomic
    def update(self, request_id: str, changes: dict[str, Any]) -> ServiceRequestEntity:
        """
        Mescla os campos informados (last-write-wins por campo).
        Chaves desconhecidas ou imutáveis são ignoradas.
        """
        pk = as_uuid(request_id)
        model = ServiceRequestModel.objects.select_for_update().filter(id=pk).first() if pk else None
        if model is None:
            raise NotFound("ServiceRequest", request_id)

        applied = [k for k in changes if k in _MUTABLE_FIELDS]
        for name in applied:
            setattr(model, name, changes[name])
        if applied:
            model.save(update_fields=[*applied, "updated_at"])
        return ServiceRequestEntity.from_model(model)

    @translate_store_errors
    def delete(self, request_id: str) -> None:
        pk = as_uuid(request_id)
        deleted = ServiceRequestModel.objects.filter(id=pk).delete()[0] if pk else 0
        if not deleted:
            raise NotFound("ServiceRequest", request_id)

    # ─────────────────────── list (paginação) ────────────────────────
    @translate_store_errors
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ServiceRequestEntity]:
        """
        Filtros aceitos: status, category, priority, user_id e search
        (título, descrição ou local).
        """
        filtros = dict(filtros or {})
        qs = ServiceRequestModel.objects.all()

        search = (filtros.pop("search", None) or "").strip()
        simple = {k: v for k, v in filtros.items() if k in ("status", "category", "priority", "user_id") and v}
        if simple:
            qs = qs.filter(**simple)
        if search:
            qs = qs.filter(
                Q(title__icontains=search)
                | Q(description__icontains=search)
                | Q(location__icontains=search)
            )

        total = qs.count()
        offset = (page - 1) * page_size
        items = [ServiceRequestEntity.from_model(m) for m in qs[offset : offset + page_size]]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
