"""Tests for the HTTP downloader against a local aiohttp server."""

from pathlib import Path

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as HTTPTestServer

from craftium_launcher.exceptions import FetchError, LauncherIOError
from craftium_launcher.net.downloader import Downloader

BODY = b"fabric-installer-bytes" * 1000
LARGE_BODY = b"\x00" * 300_000


def _make_app() -> web.Application:
    async def ok(request: web.Request) -> web.Response:
        return web.Response(body=BODY)

    async def missing(request: web.Request) -> web.Response:
        return web.Response(status=404, text="nope")

    async def large(request: web.Request) -> web.Response:
        return web.Response(body=LARGE_BODY)

    async def redirect(request: web.Request) -> web.Response:
        raise web.HTTPFound("/ok")

    app = web.Application()
    app.router.add_get("/ok", ok)
    app.router.add_get("/missing", missing)
    app.router.add_get("/redirect", redirect)
    app.router.add_get("/large", large)
    return app


@pytest.fixture
async def server():
    async with HTTPTestServer(_make_app()) as test_server:
        yield test_server


@pytest.fixture
async def downloader():
    async with Downloader() as instance:
        yield instance


class TestFetch:
    async def test_writes_body_to_destination(self, server, downloader, tmp_path: Path):
        dest = tmp_path / "installer.jar"

        await downloader.fetch(str(server.make_url("/ok")), dest)

        assert dest.read_bytes() == BODY
        assert downloader.fetch_count == 1

    async def test_overwrites_existing_file(self, server, downloader, tmp_path: Path):
        dest = tmp_path / "mod.jar"
        dest.write_bytes(b"old content that is longer than nothing")

        await downloader.fetch(str(server.make_url("/ok")), dest)

        assert dest.read_bytes() == BODY

    async def test_follows_redirects(self, server, downloader, tmp_path: Path):
        dest = tmp_path / "mod.jar"

        await downloader.fetch(str(server.make_url("/redirect")), dest)

        assert dest.read_bytes() == BODY

    async def test_http_error_status_raises_with_code(
        self, server, downloader, tmp_path: Path
    ):
        dest = tmp_path / "mod.jar"
        url = str(server.make_url("/missing"))

        with pytest.raises(FetchError) as exc_info:
            await downloader.fetch(url, dest)

        assert exc_info.value.reason == "http-status"
        assert exc_info.value.status_code == 404
        assert exc_info.value.url == url
        # The write stream is opened before the request and never cleaned up.
        assert dest.exists()
        assert dest.read_bytes() == b""

    async def test_connection_failure_is_transport_error(
        self, downloader, tmp_path: Path
    ):
        with pytest.raises(FetchError) as exc_info:
            await downloader.fetch("http://127.0.0.1:1/mod.jar", tmp_path / "mod.jar")

        assert exc_info.value.reason == "transport"
        assert exc_info.value.status_code is None

    async def test_missing_destination_directory_raises_io_error(
        self, server, downloader, tmp_path: Path
    ):
        dest = tmp_path / "does" / "not" / "exist.jar"

        with pytest.raises(LauncherIOError) as exc_info:
            await downloader.fetch(str(server.make_url("/ok")), dest)

        assert exc_info.value.reason == "path"

    @pytest.mark.skipif(not Path("/dev/full").exists(), reason="needs /dev/full")
    async def test_local_write_failure_raises_io_error(self, server, downloader):
        with pytest.raises(LauncherIOError) as exc_info:
            await downloader.fetch(str(server.make_url("/large")), Path("/dev/full"))

        assert exc_info.value.reason == "path"
        assert exc_info.value.path == "/dev/full"


class TestSessionLifecycle:
    async def test_close_is_idempotent(self):
        downloader = Downloader()
        await downloader.close()
        await downloader.close()

    async def test_does_not_close_injected_session(self, server, tmp_path: Path):
        async with aiohttp.ClientSession() as session:
            downloader = Downloader(session=session)
            await downloader.fetch(str(server.make_url("/ok")), tmp_path / "a.jar")
            await downloader.close()

            assert not session.closed
