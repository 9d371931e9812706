"""
The fixed, ordered catalog of mods and the sequential fetch over it.
"""

import asyncio
import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from craftium_launcher.models.assets import Asset, DownloadTask
from craftium_launcher.net.downloader import Downloader
from craftium_launcher.utils.path import create_dir

log = logging.getLogger(__name__)

MOD_BASE_URL = "https://example.com/mods"

DEFAULT_ASSETS = tuple(
    Asset(name=name, source_url=f"{MOD_BASE_URL}/{name}.jar")
    for name in (
        "CraftiumCore",
        "Emotes",
        "Pets",
        "Capes",
        "Cosmetics",
        "FirebaseAuth",
        "PromoCodes",
    )
)


class AssetManifest:
    """An immutable, ordered collection of assets with unique names."""

    def __init__(self, assets: Sequence[Asset] = DEFAULT_ASSETS):
        seen = set()
        for asset in assets:
            if asset.name in seen:
                raise ValueError(f"Duplicate asset name in manifest: {asset.name}")
            seen.add(asset.name)
        self._assets = tuple(assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets)

    def download_tasks(self, destination_dir: Path) -> Iterator[DownloadTask]:
        """Lazily yields one download task per asset, in declared order."""
        for asset in self._assets:
            yield DownloadTask(
                asset=asset, destination=asset.destination_in(destination_dir)
            )


async def fetch_all(
    manifest: AssetManifest,
    downloader: Downloader,
    destination_dir: Path,
    redownload: bool = True,
    on_fetched: Callable[[Path], None] | None = None,
) -> list[Path]:
    """
    Downloads every asset of `manifest` into `destination_dir`, one at a time.

    With `redownload` set, existing files are always overwritten. Otherwise an
    asset whose file already exists is skipped. The first failure propagates
    and the remaining assets are not attempted; files already fetched stay.
    `on_fetched` is called with each destination as soon as it is written,
    so callers still see progress when a later asset fails.

    Returns:
        The destination paths downloaded during this call, in order.
    """
    create_dir(destination_dir)
    fetched: list[Path] = []

    for task in manifest.download_tasks(destination_dir):
        if not redownload and await asyncio.to_thread(task.destination.is_file):
            log.debug(f"Skipping {task.asset.name}, already present.")
            continue

        log.info(f"Downloading [bold]{task.asset.name}[/bold]...")
        await downloader.fetch(task.asset.source_url, task.destination)
        fetched.append(task.destination)
        if on_fetched:
            on_fetched(task.destination)

    return fetched
