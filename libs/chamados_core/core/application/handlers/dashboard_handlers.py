from chamados_core.core.application.dtos.dashboard_dto import DashboardStatsDTO, FinancialSummaryDTO
from chamados_core.core.application.queries.dashboard_queries import (
    GetDashboardStatsQuery,
    GetFinancialSummaryQuery,
)
from chamados_core.core.application.services.access_policy import require_planner
from chamados_core.core.application.services.dashboard_service import DashboardService
from chamados_core.core.domain.repositories.service_request_repository import ServiceRequestRepository
from chamados_core.core.domain.services.clock import Clock, utc_now


class GetDashboardStatsHandler:
    def __init__(self, repo: ServiceRequestRepository, clock: Clock = utc_now):
        self.service = DashboardService(repo, clock)

    def handle(self, query: GetDashboardStatsQuery) -> DashboardStatsDTO:
        require_planner(query.actor)
        return self.service.get_stats()


class GetFinancialSummaryHandler:
    def __init__(self, repo: ServiceRequestRepository, clock: Clock = utc_now):
        self.service = DashboardService(repo, clock)

    def handle(self, query: GetFinancialSummaryQuery) -> FinancialSummaryDTO:
        require_planner(query.actor)
        return self.service.get_financial_summary()
