from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class DashboardStatsDTO:
    total: int
    pending: int
    scheduled: int
    inProgress: int
    completed: int
    overdue: int
    totalRevenue: Decimal
    pendingPayments: int


@dataclass(frozen=True)
class PaymentBucketDTO:
    amount: Decimal
    count: int
    requestIds: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FinancialSummaryDTO:
    totalRevenue: Decimal
    paid: PaymentBucketDTO
    pending: PaymentBucketDTO
    overdue: PaymentBucketDTO
