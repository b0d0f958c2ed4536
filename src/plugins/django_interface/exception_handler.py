"""
Tradução das exceções de domínio (e de validação pydantic) para respostas HTTP.
"""
import pydantic
import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from chamados_core.core.domain.events.exceptions import (
    DuplicateUser,
    InvalidTransition,
    NoPaymentAttached,
    NotAuthenticated,
    NotAuthorized,
    NotFound,
    PaymentMethodRequired,
    ServiceDeskError,
    StoreUnavailable,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# ordem importa: subclasses antes das bases
STATUS_BY_ERROR: tuple[tuple[type[ServiceDeskError], int, str], ...] = (
    (NotAuthenticated,      status.HTTP_401_UNAUTHORIZED,        "not_authenticated"),
    (NotAuthorized,         status.HTTP_403_FORBIDDEN,           "not_authorized"),
    (NotFound,              status.HTTP_404_NOT_FOUND,           "not_found"),
    (InvalidTransition,     status.HTTP_409_CONFLICT,            "invalid_transition"),
    (DuplicateUser,         status.HTTP_409_CONFLICT,            "duplicate_user"),
    (PaymentMethodRequired, status.HTTP_400_BAD_REQUEST,         "payment_method_required"),
    (NoPaymentAttached,     status.HTTP_400_BAD_REQUEST,         "no_payment_attached"),
    (ValidationError,       status.HTTP_400_BAD_REQUEST,         "validation_error"),
    (StoreUnavailable,      status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable"),
)


def _pydantic_errors(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "non_field_errors"
        errors.setdefault(field, []).append(err.get("msg", "inválido"))
    return errors


def api_exception_handler(exc, context):
    if isinstance(exc, pydantic.ValidationError):
        return Response(
            {"detail": "Dados inválidos", "code": "validation_error", "errors": _pydantic_errors(exc)},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, ServiceDeskError):
        for error_type, http_status, code in STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                body = {"detail": str(exc), "code": code}
                field = getattr(exc, "field", None)
                if field:
                    body["field"] = field
                log = logger.error if http_status >= 500 else logger.info  # noqa: PLR2004
                log("api.domain_error", code=code, status=http_status, detail=str(exc))
                return Response(body, status=http_status)

    return drf_exception_handler(exc, context)
