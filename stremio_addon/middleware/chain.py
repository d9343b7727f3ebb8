"""
Middleware Chain
Builds the request pipeline shared by every addon route

Order (first entry is outermost):

    Timer -> AccessLog -> CORS -> Recovery -> route handler

The access log sits right inside the timer so the request context exists
when it reads it, and outside CORS and recovery so its duration includes
both. CORS sits outside recovery so recovered 500 responses still carry
CORS headers. Changing the order changes observable behavior.
"""
from typing import List

from starlette.middleware import Middleware
from starlette.types import ASGIApp

from stremio_addon.middleware.access_log import AccessLogMiddleware
from stremio_addon.middleware.cors import cors_middleware
from stremio_addon.middleware.recovery import RecoveryMiddleware
from stremio_addon.middleware.timing import TimerMiddleware


def build_middleware(
    log_requests: bool = True,
    print_recovery_stack: bool = True,
) -> List[Middleware]:
    """
    Build the ordered pipeline stages

    Args:
        log_requests: Include the access log stage
        print_recovery_stack: Log tracebacks of recovered exceptions

    Returns:
        Stages for `FastAPI(middleware=...)` or `apply_middleware`
    """
    stages = [Middleware(TimerMiddleware)]
    if log_requests:
        stages.append(Middleware(AccessLogMiddleware))
    stages.append(cors_middleware())
    stages.append(Middleware(RecoveryMiddleware, print_stack=print_recovery_stack))
    return stages


def apply_middleware(app: ASGIApp, stages: List[Middleware]) -> ASGIApp:
    """Wrap a bare ASGI app in the given stages, first stage outermost"""
    for cls, args, kwargs in reversed(stages):
        app = cls(app, *args, **kwargs)
    return app
