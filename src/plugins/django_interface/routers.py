from rest_framework.routers import DefaultRouter

from .views.service_request_views import ServiceRequestViewSet

# lista de (rota, ViewSet)
RESOURCES = [
    ("service-requests", ServiceRequestViewSet),
]


def build_router() -> DefaultRouter:
    router = DefaultRouter(trailing_slash=False)
    for prefix, viewset in RESOURCES:
        router.register(prefix, viewset, basename=prefix.replace('-', '_'))
    return router
