from prometheus_client import Counter, Histogram

# Registrados no REGISTRY padrão, exportado pelo django-prometheus em /metrics

# — HTTP (views REST)
HTTP_REQUEST_LATENCY = Histogram(
    'chamados_request_duration_seconds',
    'Latência de requisições HTTP',
    ['method', 'view', 'status'],
)
HTTP_REQUEST_COUNT = Counter(
    'chamados_requests_total',
    'Total de requisições HTTP',
    ['method', 'view', 'status'],
)

# — Ciclo de vida dos chamados
SERVICE_REQUESTS_CREATED = Counter(
    'service_requests_created_total',
    'Chamados abertos',
    ['category', 'priority'],
)
STATUS_TRANSITIONS = Counter(
    'service_request_transitions_total',
    'Transições de status aplicadas',
    ['from_status', 'to_status'],
)

# — Cobranças
PAYMENTS_ATTACHED = Counter(
    'service_request_payments_attached_total',
    'Cobranças anexadas na conclusão',
)
PAYMENTS_RECEIVED = Counter(
    'service_request_payments_received_total',
    'Cobranças baixadas',
    ['payment_method'],
)

# — Cadastro
USERS_REGISTERED = Counter(
    'registered_users_total',
    'Cadastros de clientes concluídos',
)

# — Feed de alterações
CHANGE_NOTIFICATIONS = Counter(
    'service_request_change_notifications_total',
    'Avisos de alteração enviados ao grupo realtime',
    ['event'],
)
