from chamados_core.core.application.commands.registration_commands import RegisterUserCommand
from chamados_core.core.application.cqrs import CommandHandler
from chamados_core.core.application.services.auth_service import AuthService
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity
from chamados_core.core.domain.events.events import UserRegisteredEvent
from chamados_core.core.domain.services.event_dispatcher import EventDispatcher


class RegisterUserHandler(CommandHandler[RegisterUserCommand]):
    def __init__(self, auth_service: AuthService, dispatcher: EventDispatcher):
        self.auth_service = auth_service
        self.dispatcher = dispatcher

    def handle(self, command: RegisterUserCommand) -> RegisteredUserEntity:
        user = self.auth_service.register(command.payload)
        self.dispatcher.dispatch(UserRegisteredEvent(user_id=user.id, first_name=user.first_name))
        return user
