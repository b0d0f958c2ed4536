from dataclasses import dataclass

from chamados_core.core.application.cqrs import CommandDTO
from chamados_core.core.application.dtos.service_request_dto import (
    CreateServiceRequestDTO,
    MarkPaymentPaidDTO,
    TransitionServiceRequestDTO,
    UpdateServiceRequestDTO,
)
from chamados_core.core.domain.entities.session_user import SessionUser


@dataclass(frozen=True)
class CreateServiceRequestCommand(CommandDTO):
    actor: SessionUser | None
    payload: CreateServiceRequestDTO


@dataclass(frozen=True)
class UpdateServiceRequestCommand(CommandDTO):
    actor: SessionUser | None
    request_id: str
    payload: UpdateServiceRequestDTO


@dataclass(frozen=True)
class TransitionServiceRequestCommand(CommandDTO):
    actor: SessionUser | None
    request_id: str
    payload: TransitionServiceRequestDTO


@dataclass(frozen=True)
class MarkPaymentPaidCommand(CommandDTO):
    actor: SessionUser | None
    request_id: str
    payload: MarkPaymentPaidDTO


@dataclass(frozen=True)
class DeleteServiceRequestCommand(CommandDTO):
    actor: SessionUser | None
    request_id: str
