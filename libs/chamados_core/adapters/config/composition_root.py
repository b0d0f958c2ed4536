from dependency_injector import containers, providers

container = None


def setup_di_container_from_settings(settings):
    """Inicializa o DI container após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    from chamados_core.adapters.message_broker.change_feed import ServiceRequestChangeNotifier
    from chamados_core.adapters.observability.event_metrics import subscribe_event_metrics
    from chamados_core.adapters.repositories.registered_user_repo_impl import RegisteredUserRepoImpl
    from chamados_core.adapters.repositories.service_request_repo_impl import ServiceRequestRepoImpl
    from chamados_core.adapters.security.hash_service import HashService
    from chamados_core.adapters.security.session import SessionManager

    # Commands
    from chamados_core.core.application.commands.registration_commands import RegisterUserCommand
    from chamados_core.core.application.commands.service_request_commands import (
        CreateServiceRequestCommand,
        DeleteServiceRequestCommand,
        MarkPaymentPaidCommand,
        TransitionServiceRequestCommand,
        UpdateServiceRequestCommand,
    )

    # CQRS buses
    from chamados_core.core.application.cqrs import CommandBus, QueryBus

    # Handlers
    from chamados_core.core.application.handlers.dashboard_handlers import (
        GetDashboardStatsHandler,
        GetFinancialSummaryHandler,
    )
    from chamados_core.core.application.handlers.query_handlers import (
        GetServiceRequestHandler,
        ListServiceRequestsByOwnerHandler,
        ListServiceRequestsByStatusHandler,
        ListServiceRequestsHandler,
    )
    from chamados_core.core.application.handlers.registration_handlers import RegisterUserHandler
    from chamados_core.core.application.handlers.service_request_handlers import (
        CreateServiceRequestHandler,
        DeleteServiceRequestHandler,
        MarkPaymentPaidHandler,
        TransitionServiceRequestHandler,
        UpdateServiceRequestHandler,
    )

    # Queries
    from chamados_core.core.application.queries.dashboard_queries import (
        GetDashboardStatsQuery,
        GetFinancialSummaryQuery,
    )
    from chamados_core.core.application.queries.service_request_queries import (
        GetServiceRequestQuery,
        ListServiceRequestsByOwnerQuery,
        ListServiceRequestsByStatusQuery,
        ListServiceRequestsQuery,
    )
    from chamados_core.core.application.services.auth_service import AuthService
    from chamados_core.core.domain.services.clock import utc_now
    from chamados_core.core.domain.services.event_dispatcher import EventDispatcher
    from chamados_core.core.domain.services.request_lifecycle import LifecyclePolicy

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        clock            = providers.Object(utc_now)
        event_dispatcher = providers.Singleton(EventDispatcher)
        change_notifier  = providers.Singleton(ServiceRequestChangeNotifier)

        # CQRS
        command_bus = providers.Singleton(CommandBus)
        query_bus   = providers.Singleton(QueryBus)

        # Repositórios
        service_request_repo = providers.Singleton(ServiceRequestRepoImpl)
        registered_user_repo = providers.Singleton(RegisteredUserRepoImpl)

        # Segurança / sessão
        hash_service    = providers.Singleton(HashService)
        session_manager = providers.Singleton(SessionManager)
        auth_service    = providers.Singleton(
            AuthService,
            user_repo=registered_user_repo,
            hash_service=hash_service,
            planner_access_key_hash=config.planner.access_key_hash,
            planner_display_name=config.planner.display_name,
            clock=clock,
        )

        lifecycle_policy = providers.Singleton(
            LifecyclePolicy,
            default_scheduled_days=config.lifecycle.default_scheduled_days,
            payment_term_days=config.lifecycle.payment_term_days,
        )

        # Handlers (comandos)
        create_service_request_handler = providers.Factory(
            CreateServiceRequestHandler, repo=service_request_repo, dispatcher=event_dispatcher, clock=clock
        )
        update_service_request_handler = providers.Factory(
            UpdateServiceRequestHandler, repo=service_request_repo, dispatcher=event_dispatcher, clock=clock
        )
        transition_service_request_handler = providers.Factory(
            TransitionServiceRequestHandler,
            repo=service_request_repo,
            dispatcher=event_dispatcher,
            clock=clock,
            policy=lifecycle_policy,
        )
        mark_payment_paid_handler = providers.Factory(
            MarkPaymentPaidHandler, repo=service_request_repo, dispatcher=event_dispatcher, clock=clock
        )
        delete_service_request_handler = providers.Factory(
            DeleteServiceRequestHandler, repo=service_request_repo, dispatcher=event_dispatcher, clock=clock
        )
        register_user_handler = providers.Factory(
            RegisterUserHandler, auth_service=auth_service, dispatcher=event_dispatcher
        )

        # Handlers (queries)
        get_service_request_handler       = providers.Factory(GetServiceRequestHandler,           repo=service_request_repo)
        list_service_requests_handler     = providers.Factory(ListServiceRequestsHandler,         repo=service_request_repo)
        list_by_owner_handler             = providers.Factory(ListServiceRequestsByOwnerHandler,  repo=service_request_repo)
        list_by_status_handler            = providers.Factory(ListServiceRequestsByStatusHandler, repo=service_request_repo)
        dashboard_stats_handler           = providers.Factory(GetDashboardStatsHandler,           repo=service_request_repo, clock=clock)
        financial_summary_handler         = providers.Factory(GetFinancialSummaryHandler,         repo=service_request_repo, clock=clock)

        def init(self):
            # Bus de comandos
            cmd_bus = self.command_bus()
            cmd_bus.register(CreateServiceRequestCommand, self.create_service_request_handler())
            cmd_bus.register(UpdateServiceRequestCommand, self.update_service_request_handler())
            cmd_bus.register(TransitionServiceRequestCommand, self.transition_service_request_handler())
            cmd_bus.register(MarkPaymentPaidCommand, self.mark_payment_paid_handler())
            cmd_bus.register(DeleteServiceRequestCommand, self.delete_service_request_handler())
            cmd_bus.register(RegisterUserCommand, self.register_user_handler())

            # Bus de queries
            qry_bus = self.query_bus()
            qry_bus.register(GetServiceRequestQuery, self.get_service_request_handler())
            qry_bus.register(ListServiceRequestsQuery, self.list_service_requests_handler())
            qry_bus.register(ListServiceRequestsByOwnerQuery, self.list_by_owner_handler())
            qry_bus.register(ListServiceRequestsByStatusQuery, self.list_by_status_handler())
            qry_bus.register(GetDashboardStatsQuery, self.dashboard_stats_handler())
            qry_bus.register(GetFinancialSummaryQuery, self.financial_summary_handler())

            # Assinantes de eventos
            dispatcher = self.event_dispatcher()
            self.change_notifier().subscribe_to(dispatcher)
            subscribe_event_metrics(dispatcher)

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.planner.access_key_hash.from_value(settings.PLANNER_ACCESS_KEY_HASH)
    container.config.planner.display_name.from_value(settings.PLANNER_DISPLAY_NAME)
    container.config.lifecycle.default_scheduled_days.from_value(settings.DEFAULT_SCHEDULED_DAYS)
    container.config.lifecycle.payment_term_days.from_value(settings.PAYMENT_TERM_DAYS)
    Container.init(container)
    return container
