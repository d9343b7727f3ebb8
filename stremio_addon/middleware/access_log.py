"""
Access Log Middleware
One structured log record per handled request
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from stremio_addon.middleware.timing import get_request_context
from stremio_addon.utils.helpers import format_duration, request_url

logger = logging.getLogger("stremio_addon.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Logs method, URL, remote address, user agent and duration of each request

    Runs the rest of the chain first and logs afterwards. The duration is
    measured from the timestamp TimerMiddleware installed, so it covers CORS
    handling and recovery as well as the route handler.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        context = get_request_context(request.scope, stage="access_log")
        duration = format_duration(context.elapsed_ms())

        client = request.client
        fields = {
            "method": request.method,
            "url": request_url(request.url.path, request.url.query),
            "remoteAddr": f"{client.host}:{client.port}" if client else "",
            "userAgent": request.headers.get("user-agent", ""),
            "duration": duration,
        }
        logger.info(
            "Handled request method=%s url=%s remoteAddr=%s userAgent=%s duration=%s",
            fields["method"],
            fields["url"],
            fields["remoteAddr"],
            fields["userAgent"],
            fields["duration"],
            extra=fields,
        )

        return response
