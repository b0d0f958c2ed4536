from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from chamados_core.adapters.config.composition_root import container as core_container
from chamados_core.adapters.observability.decorators import track_http
from chamados_core.core.application.commands.registration_commands import RegisterUserCommand
from chamados_core.core.application.dtos.auth_dto import LoginDTO, RegisterUserDTO
from chamados_core.core.domain.entities.session_user import SessionUser
from plugins.django_interface.serializers.core_serializers import (
    RegisteredUserSerializer,
    SessionUserSerializer,
)

core_command_bus = core_container.command_bus()


class RegisterView(APIView):
    """
    POST /api/auth/register/ — cadastra um cliente e já abre a sessão.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("RegisterView_post")
    def post(self, request):
        dto = RegisterUserDTO(**request.data)
        user = core_command_bus.dispatch(RegisterUserCommand(payload=dto))

        session_user = SessionUser.for_client(user)
        resp = Response(
            {
                "user": RegisteredUserSerializer(user).data,
                "session": SessionUserSerializer(session_user).data,
            },
            status=status.HTTP_201_CREATED,
        )
        resp.data["token"] = core_container.session_manager().save(resp, session_user)
        return resp


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("LoginView_post")
    def post(self, request):
        dto = LoginDTO(**request.data)
        user = core_container.auth_service().login(dto)
        if user is None:
            detail = (
                "Chave de acesso inválida."
                if dto.is_planner_login
                else "Usuário não encontrado. Verifique seu nome e os 4 últimos dígitos do WhatsApp."
            )
            return Response({"detail": detail, "code": "invalid_credentials"},
                            status=status.HTTP_401_UNAUTHORIZED)

        resp = Response(
            {"message": "Autenticado com sucesso.", "user": SessionUserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
        resp.data["token"] = core_container.session_manager().save(resp, user)
        return resp


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @track_http("LogoutView_post")
    def post(self, request):
        resp = Response({"message": "Logout realizado."}, status=status.HTTP_200_OK)
        core_container.session_manager().clear(resp)
        return resp


class HealthCheckView(APIView):
    """
    Rota GET /api/healthz/ — retorna status 200 se a API estiver viva.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        return Response({"status": "ok"}, status=status.HTTP_200_OK)
