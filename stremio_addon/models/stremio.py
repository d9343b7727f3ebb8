"""
Stremio Protocol Models
Pydantic models for the Stremio addon protocol

Attribute names are the wire names. Fields without a default are always
serialized; fields with a default are left out while they hold an empty
value (None, "", 0, False, [] or a nested model with nothing to emit).
"""
from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, List, Literal, Mapping, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    field_validator,
    model_serializer,
    model_validator,
)

from stremio_addon.utils.helpers import format_released, parse_released

ResourceName = Literal["catalog", "meta", "stream", "subtitles", "addon_catalog"]

STREAM_SOURCES = ("url", "ytId", "infoHash", "externalUrl")


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _validate_released(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_released(value)
    if isinstance(value, str) and value:
        try:
            parse_released(value)
        except ValueError:
            raise ValueError(f"released must be an ISO 8601 timestamp, got {value!r}")
    return value


ReleaseTimestamp = Annotated[str, BeforeValidator(_validate_released)]


class StremioModel(BaseModel):
    """Base for all wire models: immutable, omits empty optional fields"""

    model_config = ConfigDict(frozen=True)

    # Optional fields that are emitted even when empty
    always_emit: ClassVar[FrozenSet[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if field.is_required() or name in self.always_emit:
                continue
            if name in data and _is_empty(data[name]):
                del data[name]
        return data


class BehaviorHints(StremioModel):
    """Opt-in addon behavior flags"""
    adult: bool = False
    p2p: bool = False
    configurable: bool = False
    # Should only be set on the unconfigured manifest, Stremio hides the
    # "Install" button otherwise
    configurationRequired: bool = False


class ResourceItem(StremioModel):
    """A resource the addon serves, restricted to some types/id prefixes"""
    name: ResourceName
    types: List[str]
    idPrefixes: List[str] = Field(default_factory=list)


class ExtraItem(StremioModel):
    """Extra parameter (filter, search, paging) accepted by a catalog"""
    name: str
    isRequired: bool = False
    options: List[str] = Field(default_factory=list)
    optionsLimit: int = Field(0, ge=0)


class ManifestCatalog(StremioModel):
    """Catalog definition in manifest"""
    type: str
    id: str
    name: str
    extra: List[ExtraItem] = Field(default_factory=list)


class Manifest(StremioModel):
    """
    Stremio addon manifest

    `resources` is either the short form (list of resource names) or the
    long form (list of ResourceItem), never a mix of both.
    """
    id: str
    name: str
    description: str
    version: str

    resources: Union[List[ResourceItem], List[ResourceName]]
    types: List[str]
    catalogs: List[ManifestCatalog] = Field(default_factory=list)

    idPrefixes: List[str] = Field(default_factory=list)
    background: str = ""  # URL
    logo: str = ""  # URL
    contactEmail: str = ""
    behaviorHints: BehaviorHints = Field(default_factory=BehaviorHints)

    always_emit: ClassVar[FrozenSet[str]] = frozenset({"catalogs"})

    @field_validator("resources")
    @classmethod
    def _require_resources(cls, value):
        if not value:
            raise ValueError("manifest must declare at least one resource")
        return value

    @field_validator("types")
    @classmethod
    def _require_types(cls, value):
        if not value:
            raise ValueError("manifest must declare at least one type")
        return value

    @model_validator(mode="after")
    def _unique_catalogs(self):
        seen = set()
        for catalog in self.catalogs:
            key = (catalog.type, catalog.id)
            if key in seen:
                raise ValueError(f"duplicate catalog type/id: {catalog.type}/{catalog.id}")
            seen.add(key)
        return self

    def resource_names(self) -> List[str]:
        """Names of declared resources regardless of the form used"""
        return [r.name if isinstance(r, ResourceItem) else r for r in self.resources]

    def declares(self, resource: str) -> bool:
        return resource in self.resource_names()

    def find_catalog(self, type: str, id: str):
        for catalog in self.catalogs:
            if catalog.type == type and catalog.id == id:
                return catalog
        return None


class MetaLink(StremioModel):
    """
    Link to a page within Stremio (genre, director, cast, ...)

    Meant to replace `genres`, `director` and `cast` eventually.
    """
    name: str
    category: str
    url: str  # URL or Stremio meta link


class MetaPoster(StremioModel):
    """Catalog item (meta preview)"""
    id: str
    type: str
    name: str
    poster: str  # URL

    posterShape: str = ""

    # Used for the "Discover" page sidebar
    genres: List[str] = Field(default_factory=list)
    director: List[str] = Field(default_factory=list)
    cast: List[str] = Field(default_factory=list)
    links: List[MetaLink] = Field(default_factory=list)
    imdbRating: str = ""
    releaseInfo: str = ""  # "2000" for movies, "2000-2014" or "2000-" for series
    description: str = ""


class _StreamBase(StremioModel):
    model_config = ConfigDict(extra="forbid")

    title: str = ""  # Usually the stream quality


class UrlStream(_StreamBase):
    """Direct HTTP(S) stream"""
    url: str = Field(..., min_length=1)


class YouTubeStream(_StreamBase):
    ytId: str = Field(..., min_length=1)


class TorrentStream(_StreamBase):
    """BitTorrent stream, `fileIdx` selects the file inside the torrent"""
    infoHash: str = Field(..., min_length=1)
    fileIdx: int = Field(0, ge=0)


class ExternalStream(_StreamBase):
    """Opened outside of Stremio, e.g. in a browser"""
    externalUrl: str = Field(..., min_length=1)


Stream = Union[UrlStream, YouTubeStream, TorrentStream, ExternalStream]

_stream_adapter = TypeAdapter(Stream)


def parse_stream(data: Union[Mapping[str, Any], _StreamBase]) -> Stream:
    """
    Validate a raw stream document into its variant

    Raises:
        ValueError: Unless exactly one source field is present and non-empty
    """
    if isinstance(data, _StreamBase):
        return data

    # A present but empty source still counts, the variant rejects it later
    sources = [key for key in STREAM_SOURCES if key in data]
    if len(sources) != 1:
        found = ", ".join(sources) if sources else "none"
        raise ValueError(
            f"stream must have exactly one of {', '.join(STREAM_SOURCES)} (found: {found})"
        )
    return _stream_adapter.validate_python(data)


def _parse_streams(value: Any) -> Any:
    if isinstance(value, list):
        return [parse_stream(item) if isinstance(item, Mapping) else item for item in value]
    return value


StreamList = Annotated[List[Stream], BeforeValidator(_parse_streams)]


class Video(StremioModel):
    """Episode or other video unit of a meta item"""
    id: str
    title: str
    released: ReleaseTimestamp  # ISO 8601, e.g. "2010-12-06T05:00:00.000Z"

    thumbnail: str = ""  # URL
    streams: StreamList = Field(default_factory=list)
    available: bool = False
    episode: str = ""
    season: str = ""
    trailer: str = ""  # YouTube ID
    overview: str = ""


class MetaItem(StremioModel):
    """Meta item returned when a single item is requested"""
    id: str
    type: str
    name: str

    genres: List[str] = Field(default_factory=list)
    director: List[str] = Field(default_factory=list)
    cast: List[str] = Field(default_factory=list)
    links: List[MetaLink] = Field(default_factory=list)
    poster: str = ""  # URL
    posterShape: str = ""
    background: str = ""  # URL
    logo: str = ""  # URL
    description: str = ""
    releaseInfo: str = ""
    imdbRating: str = ""
    released: ReleaseTimestamp = ""
    videos: List[Video] = Field(default_factory=list)
    runtime: str = ""
    language: str = ""
    country: str = ""
    awards: str = ""
    website: str = ""  # URL


class CatalogResponse(StremioModel):
    """Catalog endpoint response"""
    metas: List[MetaPoster]

    @model_validator(mode="after")
    def _unique_ids(self):
        seen = set()
        for meta in self.metas:
            if meta.id in seen:
                raise ValueError(f"duplicate meta id in catalog: {meta.id}")
            seen.add(meta.id)
        return self


class MetaResponse(StremioModel):
    """Meta endpoint response"""
    meta: MetaItem


class StreamResponse(StremioModel):
    """Stream endpoint response"""
    streams: StreamList
