"""
Read the (Brand, Part) query list.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from parts_catalogue.scraping.errors import InputFormatError
from parts_catalogue.scraping.logging_utils import log_event
from parts_catalogue.scraping.types import CatalogueQuery

logger = logging.getLogger(__name__)

BRAND_COLUMN = "Brand"
PART_COLUMN = "Part"


def read_queries(path: Path) -> list[CatalogueQuery]:
    """
    Parse the input CSV into queries, in file order.

    Brands are lower-cased. Rows missing a brand or part are skipped.
    """

    if not path.exists():
        raise InputFormatError(f"Input file not found: {path}")

    queries: list[CatalogueQuery] = []
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        headers = reader.fieldnames or []
        missing = [column for column in (BRAND_COLUMN, PART_COLUMN) if column not in headers]
        if missing:
            raise InputFormatError(
                f"Input file {path} is missing required column(s): {', '.join(missing)}."
            )

        for row_number, row in enumerate(reader, start=2):
            query = CatalogueQuery.create(row.get(BRAND_COLUMN) or "", row.get(PART_COLUMN) or "")
            if not query.brand or not query.item_identifier:
                log_event(
                    logger,
                    logging.WARNING,
                    "input_row_skipped",
                    row_number=row_number,
                    path=str(path),
                )
                continue
            queries.append(query)
    return queries
