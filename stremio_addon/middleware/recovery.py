"""
Recovery Middleware
Turns unhandled handler exceptions into a generic 500 response
"""
import logging

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RecoveryMiddleware:
    """
    Last line of defense around route handlers

    Any exception raised further down the chain is logged and answered with a
    plain "Internal Server Error". Exception details are never sent to the
    client; with `print_stack` the traceback goes to the log.
    """

    def __init__(self, app: ASGIApp, print_stack: bool = True):
        self.app = app
        self.print_stack = print_stack

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if self.print_stack:
                logger.error(
                    "Recovered from error in %s %s",
                    scope.get("method"),
                    scope.get("path"),
                    exc_info=exc,
                )
            else:
                logger.error(
                    "Recovered from error in %s %s: %s",
                    scope.get("method"),
                    scope.get("path"),
                    type(exc).__name__,
                )

            if response_started:
                # Headers are already out, the client gets a truncated body
                return

            response = PlainTextResponse("Internal Server Error", status_code=500)
            await response(scope, receive, send)
