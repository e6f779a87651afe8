"""
Buffered CSV writer for one (brand, channel) dataset.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import IO

from parts_catalogue.scraping.storage.base import RecordSink
from parts_catalogue.scraping.types import OutputRecord, RoutedItem


class CsvChannelSink(RecordSink):
    """
    Appends one channel's records for one brand to a CSV file with a fixed header.
    """

    def __init__(
        self,
        *,
        path: Path,
        brand: str,
        channel: str,
        columns: tuple[str, ...],
        batch_size: int = 500,
    ) -> None:
        self.path = path
        self.brand = brand
        self.channel = channel
        self.columns = columns
        self.written = 0
        self._batch_size = max(1, batch_size)
        self._buffer: list[OutputRecord] = []
        self._handle: IO[str] | None = None
        self._writer = None

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", encoding="utf-8", newline="")
        self._writer = csv.writer(self._handle)
        self._writer.writerow(self.columns)

    async def consume(self, routed: RoutedItem) -> None:
        if routed.query.brand != self.brand:
            return
        self._buffer.extend(routed.records.get(self.channel, []))
        if len(self._buffer) >= self._batch_size:
            self.flush()

    def flush(self) -> None:
        if self._writer is None:
            raise RuntimeError(f"CSV sink for {self.path} is not open.")
        if not self._buffer:
            return
        self._writer.writerows(self._buffer)
        self.written += len(self._buffer)
        self._buffer.clear()

    def close(self) -> None:
        if self._handle is None:
            return
        try:
            self.flush()
        finally:
            self._handle.close()
            self._handle = None
            self._writer = None
