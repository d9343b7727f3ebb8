"""
Meta Endpoint
Returns details of a single item
"""
from fastapi import APIRouter, HTTPException, Path, Request, Response

from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.utils.helpers import cache_control

router = APIRouter()


@router.get("/meta/{type}/{id}.json")
async def get_meta(
    request: Request,
    response: Response,
    type: str = Path(..., description="Content type, e.g. movie or series"),
    id: str = Path(..., description="Item ID"),
):
    registry = request.app.state.registry
    config = request.app.state.settings

    try:
        result = await registry.meta(type, id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    header = cache_control(config.CACHE_AGE_META, config.CACHE_PUBLICLY)
    if header:
        response.headers["Cache-Control"] = header

    return result.model_dump(mode="json")
