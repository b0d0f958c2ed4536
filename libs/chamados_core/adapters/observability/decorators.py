import time
from functools import wraps

from chamados_core.adapters.observability.metrics import HTTP_REQUEST_COUNT, HTTP_REQUEST_LATENCY


def track_http(view_name):
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, request, *args, **kwargs):
            start = time.perf_counter()
            status = 500
            try:
                resp = fn(self, request, *args, **kwargs)
                status = resp.status_code
                return resp
            finally:
                labels = {"method": request.method, "view": view_name, "status": str(status)}
                HTTP_REQUEST_LATENCY.labels(**labels).observe(time.perf_counter() - start)
                HTTP_REQUEST_COUNT.labels(**labels).inc()
        return wrapper
    return decorator
