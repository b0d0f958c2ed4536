from django.urls import path

from .consumers import ServiceRequestChangesConsumer

websocket_urlpatterns = [
    path("ws/service-requests/", ServiceRequestChangesConsumer.as_asgi()),
]
