from abc import ABC, abstractmethod

from chamados_core.core.domain.entities.registered_user_entity import RegisteredUserEntity


class RegisteredUserRepository(ABC):
    @abstractmethod
    def find_by_whatsapp(self, whatsapp: str) -> RegisteredUserEntity | None:
        """Busca pelo número completo (somente dígitos)."""
        ...

    @abstractmethod
    def find_by_first_name_and_last4(self, first_name: str, whatsapp_last4: str) -> RegisteredUserEntity | None:
        """Primeiro nome sem diferenciar maiúsculas + últimos 4 dígitos do WhatsApp."""
        ...

    @abstractmethod
    def add(self, entity: RegisteredUserEntity) -> RegisteredUserEntity:
        """Insere um cadastro novo. Cadastros nunca são alterados."""
        ...
