from chamados_core.core.application.cqrs import PagedResult, QueryHandler
from chamados_core.core.application.queries.service_request_queries import (
    GetServiceRequestQuery,
    ListServiceRequestsByOwnerQuery,
    ListServiceRequestsByStatusQuery,
    ListServiceRequestsQuery,
)
from chamados_core.core.application.services.access_policy import (
    ensure_can_read,
    require_authenticated,
    require_owner_or_planner,
    require_planner,
)
from chamados_core.core.domain.entities.service_request_entity import STATUSES, ServiceRequestEntity
from chamados_core.core.domain.events.exceptions import NotFound, ValidationError
from chamados_core.core.domain.repositories.service_request_repository import ServiceRequestRepository

# ───────────────────────────────────────────────
# Handlers para Queries de chamados
# ───────────────────────────────────────────────


class GetServiceRequestHandler(QueryHandler[GetServiceRequestQuery, ServiceRequestEntity]):
    def __init__(self, repo: ServiceRequestRepository):
        self.repo = repo

    def handle(self, query: GetServiceRequestQuery) -> ServiceRequestEntity:
        require_authenticated(query.actor)
        entity = self.repo.find_by_id(query.request_id)
        if entity is None:
            raise NotFound("ServiceRequest", query.request_id)
        ensure_can_read(query.actor, entity)
        return entity


class ListServiceRequestsHandler(QueryHandler[ListServiceRequestsQuery, PagedResult[ServiceRequestEntity]]):
    """Clientes enxergam apenas os próprios chamados, qualquer que seja o filtro."""

    def __init__(self, repo: ServiceRequestRepository):
        self.repo = repo

    def handle(self, query: ListServiceRequestsQuery) -> PagedResult[ServiceRequestEntity]:
        actor = require_authenticated(query.actor)
        filtros = dict(query.filtros or {})
        if not actor.is_planner:
            filtros["user_id"] = actor.id
        status = filtros.get("status")
        if status and status not in STATUSES:
            raise ValidationError(f"Status inválido: {status}", field="status")
        return self.repo.list(filtros=filtros, page=query.page, page_size=query.page_size)


class ListServiceRequestsByOwnerHandler(QueryHandler[ListServiceRequestsByOwnerQuery, list[ServiceRequestEntity]]):
    def __init__(self, repo: ServiceRequestRepository):
        self.repo = repo

    def handle(self, query: ListServiceRequestsByOwnerQuery) -> list[ServiceRequestEntity]:
        require_owner_or_planner(query.actor, query.user_id)
        return self.repo.find_by_owner(str(query.user_id))


class ListServiceRequestsByStatusHandler(QueryHandler[ListServiceRequestsByStatusQuery, list[ServiceRequestEntity]]):
    def __init__(self, repo: ServiceRequestRepository):
        self.repo = repo

    def handle(self, query: ListServiceRequestsByStatusQuery) -> list[ServiceRequestEntity]:
        require_planner(query.actor)
        if query.status not in STATUSES:
            raise ValidationError(f"Status inválido: {query.status}", field="status")
        return self.repo.find_by_status(query.status)
