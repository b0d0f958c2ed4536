from dataclasses import dataclass

from chamados_core.core.application.cqrs import CommandDTO
from chamados_core.core.application.dtos.auth_dto import RegisterUserDTO


@dataclass(frozen=True)
class RegisterUserCommand(CommandDTO):
    payload: RegisterUserDTO
