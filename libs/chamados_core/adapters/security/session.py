"""
Sessão explícita do usuário autenticado.

O estado da sessão não fica em variável global do processo: cada requisição
carrega a sessão (`load`), e as respostas de login/logout a gravam (`save`)
ou apagam (`clear`). O token vai em cookie HttpOnly ou no header
`Authorization: Bearer`.
"""
from __future__ import annotations

from datetime import timedelta

import jwt
import structlog
from django.conf import settings
from django.utils import timezone

from chamados_core.adapters.security.jwt_service import JWTService
from chamados_core.core.domain.entities.session_user import SessionUser
from chamados_core.core.domain.events.exceptions import NotAuthenticated

logger = structlog.get_logger(__name__)


class SessionManager:
    def __init__(self, jwt_service: type[JWTService] = JWTService, expires_in: int | None = None):
        self.jwt_service = jwt_service
        self._expires_in = expires_in

    @property
    def expires_in(self) -> int:
        return int(self._expires_in or settings.JWT_EXPIRES_IN)

    # ─────────────────────────── token ───────────────────────────
    def issue_token(self, user: SessionUser) -> str:
        return self.jwt_service.create_token(
            subject=user.id,
            expires_in=self.expires_in,
            role=user.role,
            extra_claims=user.to_claims(),
        )

    def user_from_token(self, token: str) -> SessionUser:
        try:
            payload = self.jwt_service.decode_token(token)
        except jwt.PyJWTError as e:
            raise NotAuthenticated(f"Token inválido: {e}") from e

        user_id = payload.get("sub")
        if not user_id:
            raise NotAuthenticated("Token não contém o claim 'sub'.")
        try:
            return SessionUser(
                id=user_id,
                first_name=payload.get("first_name") or "",
                full_name=payload.get("full_name") or "",
                role=payload.get("role") or "client",
                whatsapp_last4=payload.get("whatsapp_last4"),
            )
        except ValueError as e:
            raise NotAuthenticated(str(e)) from e

    @staticmethod
    def token_from_request(request) -> str | None:
        header = request.headers.get("Authorization", "")
        parts = header.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":  # noqa: PLR2004
            return parts[1]
        return request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None

    # ─────────────────────── ciclo de vida ───────────────────────
    def load(self, request) -> SessionUser | None:
        """Sessão da requisição, ou None quando não há token."""
        token = self.token_from_request(request)
        if not token:
            return None
        return self.user_from_token(token)

    def save(self, response, user: SessionUser) -> str:
        token = self.issue_token(user)
        response.set_cookie(
            settings.AUTH_COOKIE_NAME,
            token,
            secure=settings.AUTH_COOKIE_SECURE,
            httponly=settings.AUTH_COOKIE_HTTPONLY,
            samesite=settings.AUTH_COOKIE_SAMESITE,
            expires=timezone.now() + timedelta(seconds=self.expires_in),
        )
        logger.info("session.saved", user_id=user.id, role=user.role)
        return token

    def clear(self, response) -> None:
        response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite=settings.AUTH_COOKIE_SAMESITE)
        logger.info("session.cleared")
