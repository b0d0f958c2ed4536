from dataclasses import dataclass

from chamados_core.core.application.cqrs import QueryDTO
from chamados_core.core.domain.entities.session_user import SessionUser


@dataclass(frozen=True)
class GetDashboardStatsQuery(QueryDTO):
    actor: SessionUser | None


@dataclass(frozen=True)
class GetFinancialSummaryQuery(QueryDTO):
    actor: SessionUser | None
