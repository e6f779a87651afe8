"""
Product image downloader sink.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import requests

from parts_catalogue.scraping.config.models import ScrapeSettings
from parts_catalogue.scraping.logging_utils import log_event
from parts_catalogue.scraping.storage.base import RecordSink
from parts_catalogue.scraping.types import ImageTask, OutputChannel, RoutedItem

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ImageDownloadSink(RecordSink):
    """
    Streams each routed item's image into the brand image directory.

    Download failures are logged and skipped; they never fail the row.
    """

    channel = OutputChannel.IMAGE

    def __init__(self, *, settings: ScrapeSettings, session: requests.Session) -> None:
        self.settings = settings
        self.session = session
        self.written = 0

    def destination(self, image: ImageTask) -> Path:
        # Part numbers may contain "/"; they become subdirectories of the image dir.
        relative = image.file_name.removeprefix(f"{image.brand}/img/")
        return self.settings.image_dir(image.brand) / relative

    async def consume(self, routed: RoutedItem) -> None:
        if routed.image is None:
            return

        destination = self.destination(routed.image)
        try:
            await asyncio.to_thread(self._download, routed.image.url, destination)
        except (requests.RequestException, OSError) as exc:
            destination.unlink(missing_ok=True)
            log_event(
                logger,
                logging.WARNING,
                "image_download_failed",
                brand=routed.image.brand,
                item=routed.image.item_identifier,
                url=routed.image.url,
                error=str(exc),
            )
            return
        self.written += 1

    def _download(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with self.session.get(
            url,
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.timeout_seconds,
            stream=True,
        ) as response:
            response.raise_for_status()
            with destination.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
