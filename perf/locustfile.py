"""Locust load script for a Stremio addon built with stremio_addon.
Usage:
  uvicorn example_addon:app --port 8000
  locust -f perf/locustfile.py --host http://localhost:8000
Defaults target example_addon; override them for other addons.
"""
import os
from locust import HttpUser, task, between

CATALOG_ID = os.getenv("STREMIO_CATALOG_ID", "classics")
MOVIE_ID = os.getenv("STREMIO_MOVIE_ID", "tt0032138")
ORIGIN = os.getenv("STREMIO_ORIGIN", "https://web.strem.io")


class StremioUser(HttpUser):
    wait_time = between(0.2, 1.0)

    def on_start(self):
        self.client.headers["Origin"] = ORIGIN

    @task(1)
    def manifest(self):
        self.client.get("/manifest.json")

    @task(3)
    def movie_catalog(self):
        self.client.get(f"/catalog/movie/{CATALOG_ID}.json")

    @task(2)
    def catalog_page(self):
        for skip in (0, 100):
            self.client.get(
                f"/catalog/movie/{CATALOG_ID}/skip={skip}.json",
                name="/catalog/movie/[id]/[extra].json",
            )

    @task(3)
    def streams(self):
        self.client.get(f"/stream/movie/{MOVIE_ID}.json")

    @task(1)
    def preflight(self):
        # What browsers send before the web app fetches streams
        self.client.options(
            f"/stream/movie/{MOVIE_ID}.json",
            headers={"Access-Control-Request-Method": "GET"},
            name="/stream/movie/[id].json (preflight)",
        )
