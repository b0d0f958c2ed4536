"""
WebSocket `/ws/service-requests/`: repassa o aviso "algo mudou" às sessões
autenticadas, que então recarregam a coleção e os indicadores.
"""
from urllib.parse import parse_qs

import structlog
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from chamados_core.adapters.message_broker.change_feed import SERVICE_REQUESTS_GROUP
from chamados_core.adapters.security.session import SessionManager
from chamados_core.core.domain.events.exceptions import NotAuthenticated

logger = structlog.get_logger(__name__)

# código de fechamento para sessão ausente/inválida
CLOSE_UNAUTHENTICATED = 4401


class ServiceRequestChangesConsumer(AsyncJsonWebsocketConsumer):
    session_manager = SessionManager()

    def _token(self) -> str | None:
        query = parse_qs(self.scope.get("query_string", b"").decode())
        if query.get("token"):
            return query["token"][0]
        return self.scope.get("cookies", {}).get(settings.AUTH_COOKIE_NAME)

    async def connect(self):
        token = self._token()
        try:
            self.user = self.session_manager.user_from_token(token) if token else None
        except NotAuthenticated:
            self.user = None
        if self.user is None:
            await self.close(code=CLOSE_UNAUTHENTICATED)
            return

        await self.channel_layer.group_add(SERVICE_REQUESTS_GROUP, self.channel_name)
        await self.accept()
        logger.info("ws.connected", user_id=self.user.id, role=self.user.role)

    async def disconnect(self, code):
        if getattr(self, "user", None) is not None:
            await self.channel_layer.group_discard(SERVICE_REQUESTS_GROUP, self.channel_name)
        logger.debug("ws.disconnected", code=code)

    async def service_requests_changed(self, message):
        await self.send_json({
            "type": "changed",
            "event": message.get("event"),
            "request_id": message.get("request_id"),
            "occurred_at": message.get("occurred_at"),
        })
