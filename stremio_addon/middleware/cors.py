"""
CORS Stage
Fixed CORS policy for Stremio clients
"""
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware import Middleware

# Headers sent by the Stremio web and desktop clients.
# Accept, Accept-Language, Content-Language and Content-Type are CORS
# "safelisted"; Origin, Accept-Encoding and X-Requested-With are not.
ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "Origin",
    "Accept-Encoding",
    "Content-Language",
    "X-Requested-With",
]
ALLOWED_ORIGINS = ["*"]
# Addon endpoints are read-only
ALLOWED_METHODS = ["GET"]


def cors_middleware() -> Middleware:
    """
    CORS stage for the pipeline

    Preflight requests are answered here and never reach the route handler;
    actual requests get the allow-origin header and continue down the chain.
    """
    return Middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        allow_credentials=False,
    )
