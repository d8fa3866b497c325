"""Shared fixtures: isolated config and a fake repository contents API."""

import asyncio
import json

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from beoscrobbler import config
from beoscrobbler.models import Song


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config loader at a temp file so tests never read /etc."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config, "_SEARCH_PATHS", [str(path)])
    monkeypatch.setattr(config, "_config", None)

    def write(data: dict):
        path.write_text(json.dumps(data))
        config.reload_config()

    return write


class FakeContentsAPI:
    """Records PUTs; status and delay are set per "owner/repo"."""

    def __init__(self):
        self.requests: list[dict] = []
        self.statuses: dict[str, int] = {}
        self.delays: dict[str, float] = {}

    async def handle(self, request: web.Request) -> web.Response:
        repo = f"{request.match_info['owner']}/{request.match_info['repo']}"
        self.requests.append({
            "repo": repo,
            "path": request.match_info["path"],
            "headers": dict(request.headers),
            "body": await request.json(),
        })
        await asyncio.sleep(self.delays.get(repo, 0))
        return web.json_response({"content": {}}, status=self.statuses.get(repo, 200))


@pytest_asyncio.fixture
async def contents_api():
    api = FakeContentsAPI()
    app = web.Application()
    app.router.add_put("/repos/{owner}/{repo}/contents/{path:.*}", api.handle)
    server = TestServer(app)
    await server.start_server()
    api.url = str(server.make_url("/"))
    try:
        yield api
    finally:
        await server.close()


@pytest.fixture
def song():
    return Song(artist="Kraftwerk", track="Computer Love", album="Computer World",
                duration=435, connector="Spotify")
