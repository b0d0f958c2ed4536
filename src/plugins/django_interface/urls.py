from django.conf import settings
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from .routers import build_router
from .views.auth_views import HealthCheckView, LoginView, LogoutView, RegisterView
from .views.extra_views import DashboardStatsView, FinancialSummaryView, MeView, ReferenceDataView

swagger_permissions = [permissions.AllowAny] if settings.DEBUG else [permissions.IsAdminUser]

schema_view = get_schema_view(
    openapi.Info(
        title="Chamados Prediais",
        default_version="v1",
        description="Camada HTTP da arquitetura CQRS + Bus",
        license=openapi.License(name="BSD License"),
    ),
    public=settings.DEBUG,
    permission_classes=swagger_permissions,
)

router = build_router()

urlpatterns = [
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/",    LoginView.as_view(),    name="login"),
    path("auth/logout/",   LogoutView.as_view(),   name="logout"),
    path("auth/me/",       MeView.as_view(),       name="me"),
    path("healthz/",       HealthCheckView.as_view(), name="healthz"),
    path("reference-data/", ReferenceDataView.as_view(), name="reference-data"),
    path("dashboard/stats/",     DashboardStatsView.as_view(),   name="dashboard-stats"),
    path("dashboard/financial/", FinancialSummaryView.as_view(), name="dashboard-financial"),

    path("swagger/",     schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("swagger.json", schema_view.without_ui(cache_timeout=0),         name="swagger-json"),
    path("redoc/",       schema_view.with_ui("redoc",   cache_timeout=0), name="redoc-ui"),

    path("", include(router.urls)),
]
