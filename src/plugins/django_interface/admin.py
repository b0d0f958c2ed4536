"""
Admin site registry
-------------------
Registra os modelos de forma dinâmica.
"""

import structlog
from django.contrib import admin as django_admin

from . import models

logger = structlog.get_logger(__name__)

# ╭──────────────────────────────────────────────╮
# │ Configuração de cada ModelAdmin             │
# ╰──────────────────────────────────────────────╯
MODEL_ADMIN_REGISTRY: dict[type[models.models.Model], dict] = {
    # 1. Cadastro
    models.RegisteredUser: dict(
        list_display=("first_name", "last_name", "whatsapp_last4", "email", "registered_at"),
        search_fields=("first_name", "last_name", "whatsapp", "email"),
    ),
    # 2. Chamados
    models.ServiceRequest: dict(
        list_display=("title", "category", "priority", "status", "scheduled_date", "payment_amount", "payment_is_paid"),
        list_filter=("status", "priority", "category", "payment_is_paid"),
        search_fields=("title", "description", "location", "requester"),
        readonly_fields=("user_id", "created_at", "updated_at"),
    ),
}

# ╭──────────────────────────────────────────────╮
# │ Registro dinâmico                           │
# ╰──────────────────────────────────────────────╯
for model, opts in MODEL_ADMIN_REGISTRY.items():
    admin_class = type(f"{model.__name__}Admin", (django_admin.ModelAdmin,), opts)
    django_admin.site.register(model, admin_class)
    logger.debug("Registered model in admin", model=model.__name__)
