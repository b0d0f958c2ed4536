from dataclasses import asdict

from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from chamados_core.adapters.config.composition_root import container as core_container
from chamados_core.adapters.observability.decorators import track_http
from chamados_core.core.application.queries.dashboard_queries import (
    GetDashboardStatsQuery,
    GetFinancialSummaryQuery,
)
from chamados_core.core.domain.entities.payment_entity import PAYMENT_METHODS
from chamados_core.core.domain.entities.service_request_entity import PRIORITIES, STATUSES
from chamados_core.core.domain.reference_data import (
    PAYMENT_METHOD_LABELS,
    PRIORITY_LABELS,
    SERVICE_CATEGORIES,
    STATUS_LABELS,
)
from plugins.django_interface.permissions import IsPlannerUser
from plugins.django_interface.serializers.core_serializers import (
    DashboardStatsSerializer,
    FinancialSummarySerializer,
    SessionUserSerializer,
)

core_query_bus = core_container.query_bus()


class DashboardStatsView(APIView):
    """
    Indicadores do painel do planejador, recalculados a cada leitura
    sobre a coleção completa de chamados.
    """
    permission_classes = [IsPlannerUser]

    @track_http("DashboardStatsView_get")
    def get(self, request):
        res = core_query_bus.dispatch(GetDashboardStatsQuery(actor=request.user))
        return Response(DashboardStatsSerializer(res).data)


class FinancialSummaryView(APIView):
    permission_classes = [IsPlannerUser]

    @track_http("FinancialSummaryView_get")
    def get(self, request):
        res = core_query_bus.dispatch(GetFinancialSummaryQuery(actor=request.user))
        return Response(FinancialSummarySerializer(res).data)


class MeView(APIView):
    """
    View para retornar a sessão do usuário logado.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(SessionUserSerializer(request.user).data)


class ReferenceDataView(APIView):
    """Categorias e rótulos fixos usados pelos formulários."""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            "categories": [asdict(c) for c in SERVICE_CATEGORIES.values()],
            "statuses": [{"id": s, "label": STATUS_LABELS[s]} for s in STATUSES],
            "priorities": [{"id": p, "label": PRIORITY_LABELS[p]} for p in PRIORITIES],
            "payment_methods": [{"id": m, "label": PAYMENT_METHOD_LABELS[m]} for m in PAYMENT_METHODS],
        })
