"""
Denormalize extracted row groups into per-channel output records.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlsplit

from parts_catalogue.scraping.types import (
    CatalogueQuery,
    ExtractedItem,
    ImageTask,
    OutputChannel,
    OutputRecord,
    RoutedItem,
)


def route(item: ExtractedItem, query: CatalogueQuery) -> RoutedItem:
    """
    Prefix every row of `item` with (brand, item identifier) and file it by channel.
    """

    prefix = (query.brand, query.item_identifier)
    records: dict[str, list[OutputRecord]] = {
        OutputChannel.SPECIFICATION: _prefixed(prefix, item.specification),
        OutputChannel.ANALOG: _prefixed(prefix, item.analogs),
        OutputChannel.SUBASSEMBLY: _prefixed(prefix, item.subassemblies),
        OutputChannel.COUPLE: _prefixed(prefix, item.couplings),
        OutputChannel.USAGE: _prefixed(prefix, item.usages),
    }

    image = build_image_task(query=query, url=item.image_url)
    records[OutputChannel.IMAGE] = [] if image is None else [(*prefix, image.url)]
    return RoutedItem(query=query, records=records, image=image)


def build_image_task(*, query: CatalogueQuery, url: str | None) -> ImageTask | None:
    """
    Image download task named `{brand}/img/{item}.{ext}`, or None when the
    URL is missing or has no usable extension.
    """

    extension = image_extension(url)
    if url is None or extension is None:
        return None
    return ImageTask(
        brand=query.brand,
        item_identifier=query.item_identifier,
        url=url,
        file_name=f"{query.brand}/img/{query.item_identifier}.{extension}",
    )


def image_extension(url: str | None) -> str | None:
    if not url:
        return None
    path = urlsplit(url).path
    if "." not in path:
        return None
    extension = path.rsplit(".", 1)[1]
    if not extension or "/" in extension:
        return None
    return extension


def _prefixed(prefix: tuple[str, str], rows: Iterable[tuple[str, ...]]) -> list[OutputRecord]:
    return [(*prefix, *row) for row in rows]
