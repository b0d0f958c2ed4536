from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings


class JWTService:
    """
    Serviço de criação e validação de tokens JWT.
    """

    @staticmethod
    def create_token(
        subject: str,
        expires_in: int,
        role: str,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        """Gera um token JWT com claim 'sub', role e expiração."""
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            **(extra_claims or {}),
            "sub": str(subject),
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=int(expires_in)),
        }
        return jwt.encode(
            payload,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Decodifica e valida o token JWT, retornando o payload.
        Lança jwt.PyJWTError se inválido ou expirado.
        """
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
