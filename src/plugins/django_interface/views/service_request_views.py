# ╭────────────────────────────────────────────────────────────────────────────╮
# │  ViewSet REST – Chamados                                                   │
# │                                                                            │
# │  • Sessão         → request.user é o SessionUser carregado do JWT           │
# │  • Autorização    → regras de papel aplicadas nos handlers (core)           │
# │  • Paginação DRY  → mix-in centralizado                                    │
# │  • Métrica trace  → decorator `track_http`                                 │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from chamados_core.adapters.config.composition_root import container as core_container
from chamados_core.adapters.observability.decorators import track_http
from chamados_core.core.application.commands.service_request_commands import (
    CreateServiceRequestCommand,
    DeleteServiceRequestCommand,
    MarkPaymentPaidCommand,
    TransitionServiceRequestCommand,
    UpdateServiceRequestCommand,
)
from chamados_core.core.application.dtos.service_request_dto import (
    CreateServiceRequestDTO,
    MarkPaymentPaidDTO,
    TransitionServiceRequestDTO,
    UpdateServiceRequestDTO,
)
from chamados_core.core.application.queries.service_request_queries import (
    GetServiceRequestQuery,
    ListServiceRequestsByOwnerQuery,
    ListServiceRequestsByStatusQuery,
    ListServiceRequestsQuery,
)
from chamados_core.core.domain.events.exceptions import ValidationError
from plugins.django_interface.serializers.core_serializers import ServiceRequestSerializer

core_command_bus = core_container.command_bus()
core_query_bus = core_container.query_bus()

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Helper mix-in – paginação + filtros                                      │
# ╰──────────────────────────────────────────────────────────────────────────╯
class PaginationFilterMixin:
    """Remove page/page_size do QueryDict e devolve filtros limpos."""

    @staticmethod
    def _pagination(request) -> tuple[int, int]:
        try:
            page = int(request.query_params.get("page", 1))
            size = int(request.query_params.get("page_size", DEFAULT_PAGE_SIZE))
        except ValueError as e:
            raise ValidationError("page e page_size devem ser inteiros", field="page") from e
        if page < 1 or size < 1:
            raise ValidationError("page e page_size devem ser positivos", field="page")
        return page, min(size, MAX_PAGE_SIZE)

    @staticmethod
    def _filters(request) -> dict[str, str]:
        params = request.query_params.copy()
        params.pop("page", None)
        params.pop("page_size", None)
        return {key: params.get(key) for key in params}


def _actor(request):
    return request.user if getattr(request.user, "is_authenticated", False) else None


class ServiceRequestViewSet(PaginationFilterMixin, viewsets.ViewSet):
    """
    Chamados de manutenção.
    • Cliente: abre chamados e consulta os próprios;
    • Planejador: enxerga todos, edita, agenda, conclui e dá baixa.
    """
    permission_classes = [permissions.IsAuthenticated]

    def _serialize(self, entity):
        return ServiceRequestSerializer(entity).data

    @track_http("ServiceRequestViewSet_list")
    def list(self, request):
        filtros = self._filters(request)
        page, page_size = self._pagination(request)

        res = core_query_bus.dispatch(
            ListServiceRequestsQuery(actor=_actor(request), filtros=filtros, page=page, page_size=page_size)
        )
        payload = {
            "results": ServiceRequestSerializer(res.items, many=True).data,
            "total_items": res.total,
            "page": page,
            "page_size": page_size,
            "total_pages": res.total_pages,
            "items_on_page": len(res.items),
        }
        return Response(payload, status=status.HTTP_200_OK)

    @track_http("ServiceRequestViewSet_retrieve")
    def retrieve(self, request, pk=None):
        entity = core_query_bus.dispatch(GetServiceRequestQuery(actor=_actor(request), request_id=pk))
        return Response(self._serialize(entity))

    @track_http("ServiceRequestViewSet_create")
    def create(self, request):
        dto = CreateServiceRequestDTO(**request.data)
        entity = core_command_bus.dispatch(CreateServiceRequestCommand(actor=_actor(request), payload=dto))
        return Response(self._serialize(entity), status=status.HTTP_201_CREATED)

    @track_http("ServiceRequestViewSet_partial_update")
    def partial_update(self, request, pk=None):
        dto = UpdateServiceRequestDTO(**request.data)
        entity = core_command_bus.dispatch(
            UpdateServiceRequestCommand(actor=_actor(request), request_id=pk, payload=dto)
        )
        return Response(self._serialize(entity))

    @track_http("ServiceRequestViewSet_destroy")
    def destroy(self, request, pk=None):
        core_command_bus.dispatch(DeleteServiceRequestCommand(actor=_actor(request), request_id=pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ───────────────────────── ciclo de vida ─────────────────────────
    @action(detail=True, methods=["post"], url_path="transition")
    @track_http("ServiceRequestViewSet_transition")
    def transition(self, request, pk=None):
        dto = TransitionServiceRequestDTO(**request.data)
        entity = core_command_bus.dispatch(
            TransitionServiceRequestCommand(actor=_actor(request), request_id=pk, payload=dto)
        )
        return Response(self._serialize(entity))

    @action(detail=True, methods=["post"], url_path="mark-paid")
    @track_http("ServiceRequestViewSet_mark_paid")
    def mark_paid(self, request, pk=None):
        dto = MarkPaymentPaidDTO(**request.data)
        entity = core_command_bus.dispatch(
            MarkPaymentPaidCommand(actor=_actor(request), request_id=pk, payload=dto)
        )
        return Response(self._serialize(entity))

    # ───────────────────────── consultas ─────────────────────────
    @action(detail=False, methods=["get"], url_path=r"by-status/(?P<status_value>[\w-]+)")
    @track_http("ServiceRequestViewSet_by_status")
    def by_status(self, request, status_value=None):
        items = core_query_bus.dispatch(
            ListServiceRequestsByStatusQuery(actor=_actor(request), status=status_value)
        )
        return Response(ServiceRequestSerializer(items, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"by-owner/(?P<user_id>[\w-]+)")
    @track_http("ServiceRequestViewSet_by_owner")
    def by_owner(self, request, user_id=None):
        items = core_query_bus.dispatch(
            ListServiceRequestsByOwnerQuery(actor=_actor(request), user_id=user_id)
        )
        return Response(ServiceRequestSerializer(items, many=True).data)

    @action(detail=False, methods=["get"], url_path="mine")
    @track_http("ServiceRequestViewSet_mine")
    def mine(self, request):
        actor = _actor(request)
        items = core_query_bus.dispatch(ListServiceRequestsByOwnerQuery(actor=actor, user_id=actor.id))
        return Response(ServiceRequestSerializer(items, many=True).data)
