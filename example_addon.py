#!/usr/bin/env python3
"""
Example addon built on stremio_addon
Example usage: uvicorn example_addon:app --port 8000
Then install http://localhost:8000/manifest.json in Stremio.
"""
from stremio_addon.core.app import create_app
from stremio_addon.core.exceptions import NotFoundError
from stremio_addon.models.stremio import (
    ExtraItem,
    Manifest,
    ManifestCatalog,
    MetaPoster,
    TorrentStream,
    UrlStream,
    YouTubeStream,
)

manifest = Manifest(
    id="com.example.public-domain",
    name="Public Domain Movies",
    description="A handful of public domain movies",
    version="0.1.0",
    resources=["catalog", "stream"],
    types=["movie"],
    catalogs=[
        ManifestCatalog(
            type="movie",
            id="classics",
            name="Classics",
            extra=[ExtraItem(name="genre", options=["Horror", "Sci-Fi"]), ExtraItem(name="skip")],
        )
    ],
    idPrefixes=["tt"],
)

MOVIES = [
    MetaPoster(
        id="tt0032138",
        type="movie",
        name="The Wizard of Oz",
        poster="https://images.metahub.space/poster/medium/tt0032138/img",
        genres=["Adventure", "Family", "Fantasy"],
        releaseInfo="1939",
    ),
    MetaPoster(
        id="tt0017136",
        type="movie",
        name="Metropolis",
        poster="https://images.metahub.space/poster/medium/tt0017136/img",
        genres=["Drama", "Sci-Fi"],
        releaseInfo="1927",
    ),
    MetaPoster(
        id="tt0051744",
        type="movie",
        name="House on Haunted Hill",
        poster="https://images.metahub.space/poster/medium/tt0051744/img",
        genres=["Horror", "Mystery"],
        releaseInfo="1959",
    ),
]

STREAMS = {
    "tt0032138": [YouTubeStream(ytId="PSZxmZmBfnU", title="Trailer")],
    "tt0017136": [
        TorrentStream(infoHash="dca926c0328bb54d209d82dc8a2f391617b47d7a", fileIdx=1, title="Torrent"),
    ],
    "tt0051744": [
        UrlStream(
            url="http://archive.org/download/house_on_haunted_hill_ipod/house_on_haunted_hill_512kb.mp4",
            title="Internet Archive",
        ),
    ],
}


def movie_catalog(id, extra):
    genre = extra.get("genre")
    movies = [m for m in MOVIES if not genre or genre in m.genres]
    skip = int(extra.get("skip", 0))
    return movies[skip:skip + 100]


async def movie_streams(id):
    if id not in STREAMS:
        raise NotFoundError("stream", id)
    return STREAMS[id]


app = create_app(
    manifest,
    catalog_handlers={"movie": movie_catalog},
    stream_handlers={"movie": movie_streams},
)
