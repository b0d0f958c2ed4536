from chamados_core.core.domain.entities.service_request_entity import ServiceRequestEntity
from chamados_core.core.domain.entities.session_user import SessionUser
from chamados_core.core.domain.events.exceptions import NotAuthenticated, NotAuthorized, NotFound


def require_authenticated(actor: SessionUser | None) -> SessionUser:
    if actor is None:
        raise NotAuthenticated("Sessão não autenticada")
    return actor


def require_planner(actor: SessionUser | None) -> SessionUser:
    actor = require_authenticated(actor)
    if not actor.is_planner:
        raise NotAuthorized("Operação exclusiva do planejador")
    return actor


def require_owner_or_planner(actor: SessionUser | None, user_id: str) -> SessionUser:
    actor = require_authenticated(actor)
    if not actor.is_planner and actor.id != str(user_id):
        raise NotAuthorized("Clientes só podem consultar os próprios chamados")
    return actor


def ensure_can_read(actor: SessionUser | None, request: ServiceRequestEntity) -> None:
    """Chamados de outros clientes são tratados como inexistentes."""
    actor = require_authenticated(actor)
    if not actor.is_planner and request.user_id != actor.id:
        raise NotFound("ServiceRequest", request.id)
