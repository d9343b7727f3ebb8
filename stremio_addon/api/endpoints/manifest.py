"""
Manifest Endpoint
Returns the Stremio addon manifest
"""
from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get("/manifest.json")
async def get_manifest(request: Request, response: Response):
    """
    Return addon manifest

    The manifest defines what resources, types and catalogs this addon provides
    """
    # Avoid stale manifests in Stremio
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"

    manifest = request.app.state.registry.manifest
    return manifest.model_dump(mode="json")
