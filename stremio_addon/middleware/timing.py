"""
Request Timing Middleware
Installs the per-request context (start timestamp) read by later stages
"""
import time
from dataclasses import dataclass, field

from starlette.types import ASGIApp, Receive, Scope, Send

from stremio_addon.core.exceptions import MissingRequestContextError

# Scope key of the RequestContext
CONTEXT_KEY = "stremio_addon.request_context"


@dataclass(frozen=True)
class RequestContext:
    """Values captured when a request enters the pipeline"""

    started_at: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> int:
        """Whole milliseconds since the request entered the pipeline"""
        return max(0, int((time.perf_counter() - self.started_at) * 1000))


class TimerMiddleware:
    """
    Outermost pipeline stage

    Passes a copy of the ASGI scope that carries a fresh RequestContext to
    the rest of the chain; the incoming scope is left untouched.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        derived = dict(scope)
        derived[CONTEXT_KEY] = RequestContext()
        await self.app(derived, receive, send)


def get_request_context(scope: Scope, stage: str = "unknown") -> RequestContext:
    """
    Read the RequestContext installed by TimerMiddleware

    Raises:
        MissingRequestContextError: If the scope never passed the timer
    """
    try:
        return scope[CONTEXT_KEY]
    except KeyError:
        raise MissingRequestContextError(stage) from None
