import re

from pydantic import BaseModel, EmailStr, field_validator

MIN_WHATSAPP_DIGITS = 10


class RegisterUserDTO(BaseModel):
    first_name: str
    last_name: str
    whatsapp: str
    email: EmailStr | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _required(cls, v, info):
        v = str(v or "").strip()
        if not v:
            raise ValueError(f"{info.field_name} é obrigatório")
        return v

    @field_validator("whatsapp", mode="before")
    @classmethod
    def _min_digits(cls, v):
        # o "+" do código de país segue para a normalização
        raw = str(v or "").strip()
        if len(re.sub(r"\D+", "", raw)) < MIN_WHATSAPP_DIGITS:
            raise ValueError(f"WhatsApp deve ter pelo menos {MIN_WHATSAPP_DIGITS} dígitos")
        return raw

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, v):
        if v is None:
            return None
        return str(v).strip() or None


class LoginDTO(BaseModel):
    """
    Login de cliente (primeiro nome + últimos 4 dígitos do WhatsApp) ou do
    planejador (primeiro nome + chave de acesso). A chave tem precedência.
    """
    first_name: str
    whatsapp_last4: str | None = None
    access_key: str | None = None

    @field_validator("first_name", mode="before")
    @classmethod
    def _required(cls, v):
        v = str(v or "").strip()
        if not v:
            raise ValueError("Por favor, informe seu primeiro nome")
        return v

    @field_validator("whatsapp_last4", "access_key", mode="before")
    @classmethod
    def _blank(cls, v):
        return str(v or "").strip() or None

    @property
    def is_planner_login(self) -> bool:
        return self.access_key is not None
