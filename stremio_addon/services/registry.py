"""
Handler Registry
Dispatches addon requests to the handlers supplied by the host application
"""
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from starlette.concurrency import run_in_threadpool

from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.models.stremio import (
    CatalogResponse,
    Manifest,
    MetaItem,
    MetaPoster,
    MetaResponse,
    Stream,
    StreamResponse,
)

logger = logging.getLogger(__name__)

# Handlers may be plain functions (run in the threadpool) or coroutines
CatalogHandler = Callable[[str, Dict[str, str]], Union[List[MetaPoster], Awaitable[List[MetaPoster]]]]
MetaHandler = Callable[[str], Union[MetaItem, Awaitable[MetaItem]]]
StreamHandler = Callable[[str], Union[List[Stream], Awaitable[List[Stream]]]]


def _is_coroutine_callable(handler: Callable[..., Any]) -> bool:
    if inspect.isroutine(handler):
        return inspect.iscoroutinefunction(handler)
    if inspect.isclass(handler):
        return False
    # Callable objects with an async __call__
    return inspect.iscoroutinefunction(getattr(handler, "__call__", None))


async def _invoke(handler: Callable[..., Any], *args: Any) -> Any:
    if _is_coroutine_callable(handler):
        return await handler(*args)
    result = await run_in_threadpool(handler, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


class HandlerRegistry:
    """
    Maps media types to the host's catalog, meta and stream handlers

    Args:
        manifest: Manifest served by the addon
        catalog_handlers: Type -> handler(catalog_id, extra)
        meta_handlers: Type -> handler(item_id)
        stream_handlers: Type -> handler(video_id)

    Raises:
        ValueError: If handlers don't match what the manifest declares
    """

    def __init__(
        self,
        manifest: Manifest,
        catalog_handlers: Optional[Mapping[str, CatalogHandler]] = None,
        meta_handlers: Optional[Mapping[str, MetaHandler]] = None,
        stream_handlers: Optional[Mapping[str, StreamHandler]] = None,
    ):
        self.manifest = manifest
        self.catalog_handlers = dict(catalog_handlers or {})
        self.meta_handlers = dict(meta_handlers or {})
        self.stream_handlers = dict(stream_handlers or {})
        self._check_against_manifest()

    def _check_against_manifest(self):
        for resource, handlers in (
            ("catalog", self.catalog_handlers),
            ("meta", self.meta_handlers),
            ("stream", self.stream_handlers),
        ):
            if handlers and not self.manifest.declares(resource):
                raise ValueError(
                    f"{resource} handlers given but the manifest doesn't declare the '{resource}' resource"
                )

        catalog_types = {catalog.type for catalog in self.manifest.catalogs}
        for type in self.catalog_handlers:
            if type not in catalog_types:
                raise ValueError(f"catalog handler for type '{type}' but no catalog of that type in the manifest")

    async def catalog(self, type: str, id: str, extra: Optional[Dict[str, str]] = None) -> CatalogResponse:
        """
        Run the catalog handler for a type

        Raises:
            NotFoundError: Unknown catalog, no handler, or a required extra is missing
        """
        extra = extra or {}
        catalog = self.manifest.find_catalog(type, id)
        handler = self.catalog_handlers.get(type)
        if catalog is None or handler is None:
            raise NotFoundError("catalog", f"{type}/{id}")

        for item in catalog.extra:
            if item.isRequired and item.name not in extra:
                raise NotFoundError("catalog", f"{type}/{id}", context={"missing_extra": item.name})

        metas = await _invoke(handler, id, extra)
        logger.debug(f"Catalog {type}/{id} returned {len(metas)} items")
        return CatalogResponse(metas=metas)

    async def meta(self, type: str, id: str) -> MetaResponse:
        handler = self.meta_handlers.get(type)
        if handler is None:
            raise NotFoundError("meta", f"{type}/{id}")

        item = await _invoke(handler, id)
        return MetaResponse(meta=item)

    async def stream(self, type: str, id: str) -> StreamResponse:
        handler = self.stream_handlers.get(type)
        if handler is None:
            raise NotFoundError("stream", f"{type}/{id}")

        streams = await _invoke(handler, id)
        logger.debug(f"Stream {type}/{id} returned {len(streams)} streams")
        return StreamResponse(streams=streams)
