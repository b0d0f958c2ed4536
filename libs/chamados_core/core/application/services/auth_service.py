"""
Colaborador de identidade: cadastro de clientes e os dois caminhos de login.

Clientes entram com primeiro nome + últimos 4 dígitos do WhatsApp. O
planejador entra com primeiro nome + chave de acesso, verificada contra o
hash bcrypt configurado; sem hash configurado esse caminho fica desativado.
"""
from __future__ import annotations

import re
import uuid

import structlog

from chamados_core.adapters.security.hash_service import HashService
from chamados_core.adapters.utils.phone_utils import last4, normalize_phone
from chamados_core.core.application.dtos.auth_dto import LoginDTO, RegisterUserDTO
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity
from chamados_core.core.domain.entities.session_user import SessionUser
from chamados_core.core.domain.events.exceptions import DuplicateUser, ValidationError
from chamados_core.core.domain.repositories.registered_user_repository import RegisteredUserRepository
from chamados_core.core.domain.services.clock import Clock, utc_now

logger = structlog.get_logger(__name__)

_LAST4_RE = re.compile(r"^\d{4}$")


class AuthService:
    def __init__(  # noqa: PLR0913
        self,
        user_repo: RegisteredUserRepository,
        hash_service: HashService,
        planner_access_key_hash: str | None = None,
        planner_display_name: str = "Planejador",
        clock: Clock = utc_now,
    ):
        self.user_repo = user_repo
        self.hash_service = hash_service
        self.planner_access_key_hash = planner_access_key_hash or None
        self.planner_display_name = planner_display_name
        self.clock = clock

    # ───────────────────────── cadastro ─────────────────────────
    def register(self, dto: RegisterUserDTO) -> RegisteredUserEntity:
        whatsapp = normalize_phone(dto.whatsapp)
        if whatsapp is None:
            raise ValidationError("Número de WhatsApp inválido", field="whatsapp")
        suffix = last4(whatsapp)

        if self.user_repo.find_by_whatsapp(whatsapp) is not None:
            logger.info("registration.duplicate", reason="whatsapp", whatsapp_last4=suffix)
            raise DuplicateUser("Já existe um cadastro com este WhatsApp")
        if self.user_repo.find_by_first_name_and_last4(dto.first_name, suffix) is not None:
            logger.info("registration.duplicate", reason="name_last4", whatsapp_last4=suffix)
            raise DuplicateUser("Já existe um cadastro com este nome e final de WhatsApp")

        entity = RegisteredUserEntity(
            id=uuid.uuid4(),
            first_name=dto.first_name,
            last_name=dto.last_name,
            whatsapp=whatsapp,
            whatsapp_last4=suffix,
            registered_at=self.clock(),
            email=dto.email,
        )
        saved = self.user_repo.add(entity)
        logger.info("registration.created", user_id=str(saved.id), whatsapp_last4=suffix)
        return saved

    # ───────────────────────── login ─────────────────────────
    def login(self, dto: LoginDTO) -> SessionUser | None:
        if dto.is_planner_login:
            return self.login_planner(dto.first_name, dto.access_key)
        return self.login_client(dto.first_name, dto.whatsapp_last4)

    def login_client(self, first_name: str, whatsapp_last4: str | None) -> SessionUser | None:
        if not whatsapp_last4 or not _LAST4_RE.match(whatsapp_last4):
            raise ValidationError("Informe exatamente os 4 últimos dígitos do WhatsApp", field="whatsapp_last4")
        user = self.user_repo.find_by_first_name_and_last4(first_name.strip(), whatsapp_last4)
        if user is None:
            logger.info("login.failed", role="client", whatsapp_last4=whatsapp_last4)
            return None
        logger.info("login.succeeded", role="client", user_id=str(user.id))
        return SessionUser.for_client(user)

    def login_planner(self, first_name: str, access_key: str | None) -> SessionUser | None:
        if not self.planner_access_key_hash:
            logger.warning("login.planner_disabled")
            return None
        if not self.hash_service.verify(access_key or "", self.planner_access_key_hash):
            logger.info("login.failed", role="planner")
            return None
        logger.info("login.succeeded", role="planner", first_name=first_name)
        return SessionUser.for_planner(self.planner_display_name)
