from collections.abc import Iterable
from datetime import datetime

import structlog

from chamados_core.core.application.dtos.dashboard_dto import (
    DashboardStatsDTO,
    FinancialSummaryDTO,
    PaymentBucketDTO,
)
from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity
from chamados_core.core.domain.repositories.service_request_repository import ServiceRequestRepository
from chamados_core.core.domain.services.clock import Clock, utc_now
from chamados_core.core.domain.services.stats_aggregator import (
    PaymentBucket,
    aggregate_payments,
    aggregate_stats,
)

logger = structlog.get_logger(__name__)


def compute_dashboard_stats(requests: Iterable[ServiceRequestEntity], now: datetime) -> DashboardStatsDTO:
    acc = aggregate_stats(requests, now)
    return DashboardStatsDTO(
        total=acc.total,
        pending=acc.pending,
        scheduled=acc.scheduled,
        inProgress=acc.in_progress,
        completed=acc.completed,
        overdue=acc.overdue,
        totalRevenue=acc.total_revenue,
        pendingPayments=acc.pending_payments,
    )


def _bucket_dto(bucket: PaymentBucket) -> PaymentBucketDTO:
    return PaymentBucketDTO(amount=bucket.amount, count=bucket.count, requestIds=list(bucket.request_ids))


def compute_financial_summary(requests: Iterable[ServiceRequestEntity], now: datetime) -> FinancialSummaryDTO:
    paid, pending, overdue = aggregate_payments(requests, now)
    return FinancialSummaryDTO(
        totalRevenue=paid.amount + pending.amount,
        paid=_bucket_dto(paid),
        pending=_bucket_dto(pending),
        overdue=_bucket_dto(overdue),
    )


class DashboardService:
    """Recalcula os indicadores a cada leitura, sempre sobre a coleção completa."""

    def __init__(self, repo: ServiceRequestRepository, clock: Clock = utc_now):
        self.repo = repo
        self.clock = clock

    def get_stats(self) -> DashboardStatsDTO:
        requests = self.repo.find_all()
        stats = compute_dashboard_stats(requests, self.clock())
        logger.debug("dashboard.stats_computed", total=stats.total, overdue=stats.overdue)
        return stats

    def get_financial_summary(self) -> FinancialSummaryDTO:
        return compute_financial_summary(self.repo.find_all(), self.clock())
