from dataclasses import dataclass

from chamados_core.core.application.cqrs import PaginatedQueryDTO, QueryDTO
from chamados_core.core.domain.entities.session_user import SessionUser


@dataclass(frozen=True)
class GetServiceRequestQuery(QueryDTO):
    actor: SessionUser | None
    request_id: str


@dataclass(frozen=True)
class ListServiceRequestsQuery(PaginatedQueryDTO):
    actor: SessionUser | None


@dataclass(frozen=True)
class ListServiceRequestsByOwnerQuery(QueryDTO):
    actor: SessionUser | None
    user_id: str


@dataclass(frozen=True)
class ListServiceRequestsByStatusQuery(QueryDTO):
    actor: SessionUser | None
    status: str
