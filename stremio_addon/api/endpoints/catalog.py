"""
Catalog Endpoint
Returns catalogs produced by the host's catalog handlers
"""
import logging

from fastapi import APIRouter, HTTPException, Path, Request, Response

from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.utils.helpers import cache_control, parse_extra, raw_extra_segment

logger = logging.getLogger(__name__)
router = APIRouter()


async def _catalog(request: Request, response: Response, type: str, id: str, extra: str = ""):
    registry = request.app.state.registry
    config = request.app.state.settings

    # Decode extra values once, from the raw path
    raw_path = request.scope.get("raw_path")
    if extra and raw_path:
        extra = raw_extra_segment(raw_path)

    try:
        result = await registry.catalog(type, id, parse_extra(extra))
    except NotFoundError as e:
        logger.debug(f"Catalog not found: {e.message} {e.context}")
        raise HTTPException(status_code=404, detail=e.message)

    header = cache_control(config.CACHE_AGE_CATALOGS, config.CACHE_PUBLICLY)
    if header:
        response.headers["Cache-Control"] = header

    return result.model_dump(mode="json")


@router.get("/catalog/{type}/{id}.json")
async def get_catalog(
    request: Request,
    response: Response,
    type: str = Path(..., description="Content type, e.g. movie or series"),
    id: str = Path(..., description="Catalog ID"),
):
    """Return catalog items"""
    return await _catalog(request, response, type, id)


@router.get("/catalog/{type}/{id}/{extra}.json")
async def get_catalog_with_extra(
    request: Request,
    response: Response,
    type: str = Path(..., description="Content type, e.g. movie or series"),
    id: str = Path(..., description="Catalog ID"),
    extra: str = Path(..., description="Extra arguments, e.g. genre=Action&skip=100"),
):
    """Return catalog items filtered/paged by extra arguments"""
    return await _catalog(request, response, type, id, extra)
