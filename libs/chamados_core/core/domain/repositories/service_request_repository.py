from abc import ABC, abstractmethod
from typing import Any

from chamados_core.core.application.cqrs import PagedResult
from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity


class ServiceRequestRepository(ABC):
    @abstractmethod
    def find_by_id(self, request_id: str) -> ServiceRequestEntity | None:
        """Retorna o chamado por ID, ou None."""
        ...

    @abstractmethod
    def find_all(self) -> list[ServiceRequestEntity]:
        """Coleção completa, da criação mais recente para a mais antiga."""
        ...

    @abstractmethod
    def find_by_owner(self, user_id: str) -> list[ServiceRequestEntity]:
        """Chamados cujo `user_id` é igual ao informado (lista vazia se nenhum)."""
        ...

    @abstractmethod
    def find_by_status(self, status: str) -> list[ServiceRequestEntity]:
        """Chamados no status informado."""
        ...

    @abstractmethod
    def add(self, entity: ServiceRequestEntity) -> ServiceRequestEntity:
        """Insere um chamado novo."""
        ...

    @abstractmethod
    def save(self, entity: ServiceRequestEntity, expected_status: str | None = None) -> ServiceRequestEntity:
        """
        Grava o estado completo de um chamado existente. NotFound se ausente.
        Com `expected_status`, só grava se o status armazenado ainda for esse;
        caso contrário levanta InvalidTransition.
        """
        ...

    @abstractmethod
    def update(self, request_id: str, changes: dict[str, Any]) -> ServiceRequestEntity:
        """Mescla os campos informados no registro existente. NotFound se ausente."""
        ...

    @abstractmethod
    def delete(self, request_id: str) -> None:
        """Remove um chamado. NotFound se ausente."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int) -> PagedResult[ServiceRequestEntity]:
        """
        Retorna PagedResult contendo lista da Entidade e total,
        aplicando paginação sobre o Modelo.

        - filtros: dicionário de filtros (ex.: {'status': 'pending', 'user_id': '...'})
        - page: número da página (1-based)
        - page_size: quantidade de itens por página
        """
        ...
