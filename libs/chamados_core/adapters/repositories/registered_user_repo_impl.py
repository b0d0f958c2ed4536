import structlog
from django.db import IntegrityError, transaction

from chamados_core.adapters.repositories.store_errors import translate_store_errors
from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity
from chamados_core.core.domain.events.exceptions import DuplicateUser
from chamados_core.core.domain.repositories.registered_user_repository import RegisteredUserRepository
from plugins.django_interface.models import RegisteredUser as RegisteredUserModel

logger = structlog.get_logger(__name__)


class RegisteredUserRepoImpl(RegisteredUserRepository):
    @translate_store_errors
    def find_by_whatsapp(self, whatsapp: str) -> RegisteredUserEntity | None:
        m = RegisteredUserModel.objects.filter(whatsapp=whatsapp).first()
        return RegisteredUserEntity.from_model(m) if m else None

    @translate_store_errors
    def find_by_first_name_and_last4(self, first_name: str, whatsapp_last4: str) -> RegisteredUserEntity | None:
        m = (
            RegisteredUserModel.objects
            .filter(first_name__iexact=first_name.strip(), whatsapp_last4=whatsapp_last4)
            .order_by("registered_at")
            .first()
        )
        return RegisteredUserEntity.from_model(m) if m else None

    @translate_store_errors
    def add(self, entity: RegisteredUserEntity) -> RegisteredUserEntity:
        # whatsapp é UNIQUE: dois cadastros simultâneos do mesmo número
        try:
            with transaction.atomic():
                m = RegisteredUserModel.objects.create(**entity.to_dict())
        except IntegrityError as exc:
            logger.info("registration.duplicate", reason="unique_whatsapp", whatsapp_last4=entity.whatsapp_last4)
            raise DuplicateUser("Já existe um cadastro com este WhatsApp") from exc
        return RegisteredUserEntity.from_model(m)
