from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from chamados_core.adapters.security.session import SessionManager
from chamados_core.core.domain.events.exceptions import NotAuthenticated


class SessionJWTAuthentication(BaseAuthentication):
    """
    Lê o token do header Authorization: Bearer <token> ou do cookie
    (settings.AUTH_COOKIE_NAME) e devolve (SessionUser, token).

    O token é autocontido: a identidade vem das claims, sem consulta ao banco,
    já que o planejador não tem cadastro.
    """
    session_manager = SessionManager()

    def authenticate(self, request):
        try:
            user = self.session_manager.load(request)
        except NotAuthenticated as e:
            raise exceptions.AuthenticationFailed(str(e))  # noqa: B904
        if user is None:
            return None
        return (user, self.session_manager.token_from_request(request))

    def authenticate_header(self, request):
        return "Bearer"
