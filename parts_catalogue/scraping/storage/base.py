"""
Sink interface for routed catalogue records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from parts_catalogue.scraping.types import RoutedItem


class RecordSink(ABC):
    """
    One independent consumer of routed items.

    Each sink owns its buffer and flush discipline; the driver only calls
    `open`, `consume` per routed item, then `close` once at the end.
    """

    channel: str
    written: int = 0

    def open(self) -> None:
        """
        Prepare the destination before the first item arrives.
        """

    @abstractmethod
    async def consume(self, routed: RoutedItem) -> None:
        """
        Accept the records of one routed item.
        """

    def close(self) -> None:
        """
        Flush anything still buffered.
        """
