"""
Test configuration and fixtures
"""
import asyncio

import pytest

from stremio_addon.core.config import Settings
from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.models.stremio import (
    ExtraItem,
    Manifest,
    ManifestCatalog,
    MetaItem,
    MetaPoster,
    TorrentStream,
    UrlStream,
    Video,
)


@pytest.fixture
def test_settings():
    """Settings independent of the environment"""
    return Settings(
        LOG_REQUESTS=True,
        PRINT_RECOVERY_STACK=True,
        CACHE_AGE_CATALOGS=0,
        CACHE_AGE_META=0,
        CACHE_AGE_STREAMS=0,
        CACHE_PUBLICLY=False,
        DEBUG=False,
    )


@pytest.fixture
def sample_manifest():
    """Manifest declaring catalogs, meta and streams for movies and series"""
    return Manifest(
        id="com.example.test",
        name="Test Addon",
        description="Addon used in tests",
        version="1.0.0",
        resources=["catalog", "meta", "stream"],
        types=["movie", "series"],
        catalogs=[
            ManifestCatalog(
                type="movie",
                id="top",
                name="Top Movies",
                extra=[
                    ExtraItem(name="genre", options=["Action", "Drama"]),
                    ExtraItem(name="skip"),
                ],
            ),
            ManifestCatalog(
                type="movie",
                id="search",
                name="Search Movies",
                extra=[ExtraItem(name="search", isRequired=True)],
            ),
        ],
        idPrefixes=["tt"],
    )


@pytest.fixture
def sample_meta_poster():
    """Sample catalog item"""
    return MetaPoster(
        id="tt0137523",
        type="movie",
        name="Fight Club",
        poster="https://image.tmdb.org/t/p/w500/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        genres=["Drama"],
        releaseInfo="1999",
        imdbRating="8.8",
    )


@pytest.fixture
def sample_meta_item():
    """Sample series meta with one episode"""
    return MetaItem(
        id="tt0903747",
        type="series",
        name="Breaking Bad",
        poster="https://image.tmdb.org/t/p/w500/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
        releaseInfo="2008-2013",
        released="2008-01-20T00:00:00.000Z",
        videos=[
            Video(
                id="tt0903747:1:1",
                title="Pilot",
                released="2008-01-20T00:00:00.000Z",
                season="1",
                episode="1",
            )
        ],
    )


@pytest.fixture
def sample_handlers(sample_meta_poster, sample_meta_item):
    """Catalog, meta and stream handlers plus a record of the calls they got"""
    calls = []

    async def movie_catalog(id, extra):
        calls.append(("catalog", id, extra))
        if id == "search":
            return []
        return [sample_meta_poster]

    def series_meta(id):
        calls.append(("meta", id))
        if id != sample_meta_item.id:
            raise NotFoundError("meta", id)
        return sample_meta_item

    async def movie_streams(id):
        calls.append(("stream", id))
        if id == "tt-crash":
            raise RuntimeError("database connection lost")
        if id == "tt-slow":
            await asyncio.sleep(0.2)
        if id != sample_meta_poster.id:
            raise NotFoundError("stream", id)
        return [
            TorrentStream(infoHash="abc123", fileIdx=2, title="1080p"),
            UrlStream(url="https://cdn.example.com/fight-club.mp4"),
        ]

    return {
        "catalog_handlers": {"movie": movie_catalog},
        "meta_handlers": {"series": series_meta},
        "stream_handlers": {"movie": movie_streams},
        "calls": calls,
    }
