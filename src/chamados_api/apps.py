from django.apps import AppConfig


class ChamadosApiConfig(AppConfig):
    name = "chamados_api"
    verbose_name = "Chamados Prediais API"

    def ready(self):
        from django.conf import settings

        # ─── DI container ──────────────────────────────────────────
        from chamados_core.adapters.config.composition_root import (
            setup_di_container_from_settings as build_core_container,
        )

        build_core_container(settings)
