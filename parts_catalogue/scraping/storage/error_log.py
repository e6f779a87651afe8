"""
Append-only CSV log of queries that could not be resolved.
"""

from __future__ import annotations

import csv
from pathlib import Path

from parts_catalogue.scraping.types import CatalogueQuery


class ErrorLog:
    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, query: CatalogueQuery) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerow([query.brand, query.item_identifier])
