"""
Shared scraping runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

OutputRecord = tuple[str, ...]


class OutputChannel:
    SPECIFICATION = "specification"
    ANALOG = "analog"
    SUBASSEMBLY = "subassembly"
    COUPLE = "couple"
    USAGE = "usage"
    IMAGE = "image"

    TABULAR = (SPECIFICATION, ANALOG, SUBASSEMBLY, COUPLE, USAGE)


class RowStatus:
    ROUTED = "routed"
    FAILED = "failed"


@dataclass(frozen=True)
class CatalogueQuery:
    """
    One (brand, part number) lookup from the input list.
    """

    brand: str
    item_identifier: str

    @classmethod
    def create(cls, brand: str, item_identifier: str) -> "CatalogueQuery":
        return cls(brand=brand.strip().lower(), item_identifier=item_identifier.strip())


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of resolving one query to a catalogue page.
    """

    success: bool
    document: str | None = None

    @classmethod
    def failed(cls) -> "FetchResult":
        return cls(success=False)


@dataclass(frozen=True)
class ExtractedItem:
    """
    Structured row groups extracted from one product page.
    """

    image_url: str | None = None
    specification: list[tuple[str, str]] = field(default_factory=list)
    analogs: list[tuple[str, str]] = field(default_factory=list)
    subassemblies: list[tuple[str, str, str]] = field(default_factory=list)
    couplings: list[tuple[str]] = field(default_factory=list)
    usages: list[tuple[str, str, str, str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class ImageTask:
    """
    Product image to download; `file_name` is `{brand}/img/{item}.{ext}`.
    """

    brand: str
    item_identifier: str
    url: str
    file_name: str


@dataclass(frozen=True)
class RoutedItem:
    """
    Per-channel output records for one successfully extracted query.
    """

    query: CatalogueQuery
    records: dict[str, list[OutputRecord]]
    image: ImageTask | None = None


@dataclass(frozen=True)
class RowOutcome:
    query: CatalogueQuery
    status: str
    error: str | None = None


@dataclass(frozen=True)
class ScrapeRunSummary:
    """
    End-of-run counters.
    """

    rows_total: int
    rows_succeeded: int
    rows_failed: int
    images_saved: int
    records_written: dict[str, int] = field(default_factory=dict)
