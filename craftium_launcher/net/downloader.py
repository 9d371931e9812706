"""
Handles the low-level downloading of files over HTTP.

Each fetch streams the response body straight into the destination file.
No retry, resume or checksum step is performed. A failed fetch surfaces
immediately as a FetchError and may leave a partial file behind.
"""

import asyncio
import contextlib
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp

from craftium_launcher.exceptions import FetchError, LauncherIOError

log = logging.getLogger(__name__)

CHUNK_SIZE = 131072  # 128 KB


class Downloader:
    """Fetches remote resources to local paths over a single shared session."""

    def __init__(self, session: aiohttp.ClientSession | None = None):
        self._session = session
        self._owns_session = session is None
        self._session_lock = asyncio.Lock()
        self.fetch_count = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Gets or lazily creates the ClientSession used for all fetches."""
        async with self._session_lock:
            if self._session and not self._session.closed:
                return self._session

            connector = aiohttp.TCPConnector(
                limit_per_host=2,
                ttl_dns_cache=600,  # 10 minutes
                enable_cleanup_closed=True,
            )
            # No timeouts anywhere in the pipeline.
            timeout = aiohttp.ClientTimeout(total=None)
            self._session = aiohttp.ClientSession(
                connector=connector, timeout=timeout
            )
            self._owns_session = True
            log.debug("Created downloader HTTP session.")
        return self._session

    async def close(self) -> None:
        """Closes the HTTP session if this downloader created it."""
        async with self._session_lock:
            if self._owns_session and self._session and not self._session.closed:
                await self._session.close()
                log.debug("Downloader HTTP session closed.")
            self._session = None

    async def __aenter__(self) -> "Downloader":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str, destination_path: Path) -> None:
        """
        Downloads `url` into `destination_path`, overwriting any existing file.

        Raises:
            FetchError: with reason "http-status" for a non-2xx response, or
                "transport" for connection-level failures.
            LauncherIOError: if the destination cannot be opened or written.
        """
        self.fetch_count += 1
        session = await self._get_session()
        name = os.path.basename(destination_path)
        log.debug(f"Fetching '{url}' -> '{destination_path}'")

        try:
            f = await aiofiles.open(destination_path, "wb")
        except OSError as e:
            raise _io_error(destination_path, e) from e

        closed = False
        try:
            async with session.get(url, allow_redirects=True) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(url, "http-status", status_code=response.status)

                bytes_written = 0
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    try:
                        await f.write(chunk)
                    except OSError as e:
                        raise _io_error(destination_path, e) from e
                    bytes_written += len(chunk)

            closed = True
            try:
                await f.close()
            except OSError as e:
                raise _io_error(destination_path, e) from e
        except (aiohttp.ClientError, asyncio.TimeoutError, ConnectionError) as e:
            raise FetchError(url, "transport", detail=str(e) or type(e).__name__) from e
        finally:
            if not closed:
                # The fetch already failed; that error is the one reported.
                with contextlib.suppress(OSError):
                    await f.close()

        log.debug(f"Fetched '{name}' ({bytes_written} bytes).")


def _io_error(destination_path: Path, error: OSError) -> LauncherIOError:
    reason = "permission" if isinstance(error, PermissionError) else "path"
    return LauncherIOError(str(destination_path), reason, str(error))
