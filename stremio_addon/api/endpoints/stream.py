"""
Stream Endpoint
Returns playable streams for a video
"""
from fastapi import APIRouter, HTTPException, Path, Request, Response

from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.utils.helpers import cache_control

router = APIRouter()


@router.get("/stream/{type}/{id}.json")
async def get_streams(
    request: Request,
    response: Response,
    type: str = Path(..., description="Content type, e.g. movie or series"),
    id: str = Path(..., description="Video ID, e.g. tt0944947:1:1 for a series episode"),
):
    registry = request.app.state.registry
    config = request.app.state.settings

    try:
        result = await registry.stream(type, id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    header = cache_control(config.CACHE_AGE_STREAMS, config.CACHE_PUBLICLY)
    if header:
        response.headers["Cache-Control"] = header

    return result.model_dump(mode="json")
