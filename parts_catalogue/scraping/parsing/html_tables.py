"""
BeautifulSoup-based helpers for catalogue product pages.
"""

from __future__ import annotations

import re

from bs4 import Comment, NavigableString, Tag

WHITESPACE_REGEX = re.compile(r"\s+")
BREADCRUMB_SEPARATOR = "»"


class HTMLTableParser:
    """
    Deterministic extraction primitives shared by catalogue sources.
    """

    @staticmethod
    def table_rows(
        scope: Tag | None,
        *,
        region_selector: str,
        expected_columns: int,
    ) -> list[tuple[str, ...]]:
        """
        Cell texts of `<region> table tbody tr` rows with exactly
        `expected_columns` cells. Rows of any other width are skipped.
        """

        if scope is None:
            return []

        rows: list[tuple[str, ...]] = []
        for row in scope.select(f":scope {region_selector} table tbody tr"):
            cells = row.find_all("td")
            if len(cells) != expected_columns:
                continue
            rows.append(tuple(cell.get_text() for cell in cells))
        return [row for row in rows if row]

    @staticmethod
    def clean_text(value: str) -> str:
        return WHITESPACE_REGEX.sub(" ", value).strip()

    @staticmethod
    def split_breadcrumb(value: str) -> list[str]:
        return [part.strip() for part in value.split(BREADCRUMB_SEPARATOR)]

    @staticmethod
    def joined_text(nodes: list[Tag]) -> str:
        return "".join(node.get_text() for node in nodes)

    @staticmethod
    def last_text_node(cells: list[Tag]) -> str:
        """
        Text of the last child node across `cells`, or "" if they are empty.
        """

        children = [child for cell in cells for child in cell.contents]
        if not children:
            return ""
        last = children[-1]
        if isinstance(last, Comment):
            return ""
        if isinstance(last, NavigableString):
            return str(last)
        return last.get_text()
