import uuid

import structlog

from chamados_core.core.application.commands.service_request_commands import (
    CreateServiceRequestCommand,
    DeleteServiceRequestCommand,
    MarkPaymentPaidCommand,
    TransitionServiceRequestCommand,
    UpdateServiceRequestCommand,
)
from chamados_core.core.application.cqrs import CommandHandler
from chamados_core.core.application.services.access_policy import require_authenticated, require_planner
from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity
from chamados_core.core.domain.events.events import (
    ServiceRequestCreatedEvent,
    ServiceRequestDeletedEvent,
    ServiceRequestUpdatedEvent,
)
from chamados_core.core.domain.events.exceptions import NotFound
from chamados_core.core.domain.repositories.service_request_repository import ServiceRequestRepository
from chamados_core.core.domain.services.clock import Clock, utc_now
from chamados_core.core.domain.services.event_dispatcher import EventDispatcher
from chamados_core.core.domain.services.request_lifecycle import (
    DEFAULT_POLICY,
    LifecyclePolicy,
    mark_paid,
    transition,
)

logger = structlog.get_logger(__name__)


class _ServiceRequestCommandHandler:
    def __init__(
        self,
        repo: ServiceRequestRepository,
        dispatcher: EventDispatcher,
        clock: Clock = utc_now,
    ):
        self.repo = repo
        self.dispatcher = dispatcher
        self.clock = clock

    def _load(self, request_id: str) -> ServiceRequestEntity:
        entity = self.repo.find_by_id(request_id)
        if entity is None:
            raise NotFound("ServiceRequest", request_id)
        return entity


# ——— CREATE ——————————————————————————————————————————————

class CreateServiceRequestHandler(_ServiceRequestCommandHandler, CommandHandler[CreateServiceRequestCommand]):
    def handle(self, command: CreateServiceRequestCommand) -> ServiceRequestEntity:
        actor = require_authenticated(command.actor)
        data = command.payload

        contact = data.contact
        if not contact and actor.whatsapp_last4:
            contact = f"WhatsApp: {actor.whatsapp_last4}"

        entity = ServiceRequestEntity(
            id=uuid.uuid4(),
            user_id=actor.id,
            title=data.title,
            description=data.description,
            category=data.category,
            location=data.location,
            requester=data.requester or actor.full_name,
            contact=contact or "",
            created_at=self.clock(),
            priority=data.priority,
            status="pending",
        )
        saved = self.repo.add(entity)
        logger.info(
            "service_request.created",
            request_id=str(saved.id),
            user_id=saved.user_id,
            category=saved.category,
            priority=saved.priority,
        )
        self.dispatcher.dispatch(
            ServiceRequestCreatedEvent(
                request_id=saved.id,
                user_id=saved.user_id,
                category=saved.category,
                priority=saved.priority,
            )
        )
        return saved


# ——— UPDATE ——————————————————————————————————————————————

class UpdateServiceRequestHandler(_ServiceRequestCommandHandler, CommandHandler[UpdateServiceRequestCommand]):
    def handle(self, command: UpdateServiceRequestCommand) -> ServiceRequestEntity:
        require_planner(command.actor)
        changes = command.payload.changes()
        if not changes:
            return self._load(command.request_id)

        saved = self.repo.update(command.request_id, changes)
        self.dispatcher.dispatch(
            ServiceRequestUpdatedEvent(request_id=saved.id, fields=tuple(sorted(changes)))
        )
        return saved


# ——— TRANSITION ——————————————————————————————————————————

class TransitionServiceRequestHandler(_ServiceRequestCommandHandler, CommandHandler[TransitionServiceRequestCommand]):
    def __init__(
        self,
        repo: ServiceRequestRepository,
        dispatcher: EventDispatcher,
        clock: Clock = utc_now,
        policy: LifecyclePolicy = DEFAULT_POLICY,
    ):
        super().__init__(repo, dispatcher, clock)
        self.policy = policy

    def handle(self, command: TransitionServiceRequestCommand) -> ServiceRequestEntity:
        require_planner(command.actor)
        entity = self._load(command.request_id)
        loaded_status = entity.status
        payload = command.payload
        events = transition(
            entity,
            payload.status,
            now=self.clock(),
            scheduled_days=payload.scheduled_days,
            payment_amount=payload.payment_amount,
            payment_notes=payload.payment_notes,
            policy=self.policy,
        )
        saved = self.repo.save(entity, expected_status=loaded_status)
        self.dispatcher.dispatch_all(events)
        return saved


# ——— PAYMENT ——————————————————————————————————————————————

class MarkPaymentPaidHandler(_ServiceRequestCommandHandler, CommandHandler[MarkPaymentPaidCommand]):
    def handle(self, command: MarkPaymentPaidCommand) -> ServiceRequestEntity:
        require_planner(command.actor)
        entity = self._load(command.request_id)
        events = mark_paid(
            entity,
            command.payload.payment_method,
            now=self.clock(),
            notes=command.payload.notes,
        )
        if not events:
            return entity
        saved = self.repo.save(entity, expected_status=entity.status)
        self.dispatcher.dispatch_all(events)
        return saved


# ——— DELETE ——————————————————————————————————————————————

class DeleteServiceRequestHandler(_ServiceRequestCommandHandler, CommandHandler[DeleteServiceRequestCommand]):
    def handle(self, command: DeleteServiceRequestCommand) -> None:
        require_planner(command.actor)
        self.repo.delete(command.request_id)
        logger.info("service_request.deleted", request_id=command.request_id)
        self.dispatcher.dispatch(ServiceRequestDeletedEvent(request_id=uuid.UUID(str(command.request_id))))
