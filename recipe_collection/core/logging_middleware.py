import logging
import json
import time
import random
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Dedicated logger for request wide events. Kept outside the package logger
# hierarchy and off the root logger so the JSON lines are written once, raw.
structured_logger = logging.getLogger("api.request_events")
structured_logger.propagate = False

if not structured_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    structured_logger.addHandler(handler)
    structured_logger.setLevel(logging.INFO)


def _user_fields(request: Request) -> dict:
    user = getattr(request.state, "user", None)
    if user is None:
        return {"user_id": None, "user_email": None, "user_name": None}
    name = f"{user.first_name or ''} {user.last_name or ''}".strip() or None
    return {"user_id": str(user.id), "user_email": user.email, "user_name": name}


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Emits one JSON event per request, tail sampled:

    - server errors (status >= 500) are always logged
    - slow requests (> SLOW_THRESHOLD_MS) are always logged
    - everything else is sampled at SAMPLE_RATE
    """

    SLOW_THRESHOLD_MS = 500
    SAMPLE_RATE = 0.05

    def should_log(self, status_code: int, duration_ms: float) -> bool:
        if status_code >= 500:
            return True
        if duration_ms > self.SLOW_THRESHOLD_MS:
            return True
        return random.random() < self.SAMPLE_RATE

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = None
        error_details = None
        status_code = 500  # stays 500 if the handler raises

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error_details = str(e)
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            if self.should_log(status_code, duration_ms):
                log_payload = {
                    "timestamp": time.time(),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": request.client.host if request.client else None,
                    "user_agent": request.headers.get("user-agent"),
                    "query_params": dict(request.query_params),
                    "error": error_details,
                    **_user_fields(request),
                }
                structured_logger.info(json.dumps(log_payload))

        return response
