"""
Health Check Endpoint
"""
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for monitoring"""
    manifest = request.app.state.registry.manifest
    return {
        "status": "healthy",
        "addon": manifest.id,
        "version": manifest.version,
    }
