"""
Jikiu catalogue source (www.jikiu.com).
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict, ValidationError

from parts_catalogue.scraping.base import CatalogueSource
from parts_catalogue.scraping.errors import CatalogueLookupError
from parts_catalogue.scraping.parsing import HTMLTableParser
from parts_catalogue.scraping.types import ExtractedItem

USAGE_FIELD_COUNT = 5


class SearchMatch(BaseModel):
    """
    One candidate returned by the part-number search endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    pid: int | str


class JikiuCatalogueSource(CatalogueSource):
    """
    Search by part number, then load `/catalogue/<pid>`.
    """

    brand = "jikiu"

    SEARCH_URL = "https://www.jikiu.com/service/get_part_number"
    PAGE_URL = "https://www.jikiu.com/catalogue/{pid}"

    SEARCH_HEADERS = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-Requested-With": "XMLHttpRequest",
    }

    def search(self, item_identifier: str) -> str:
        response = self._request(
            "POST",
            self.SEARCH_URL,
            json={"search_part": item_identifier},
            headers=self.SEARCH_HEADERS,
        )
        matches = response.json()
        if not isinstance(matches, list) or not matches or not matches[0]:
            raise CatalogueLookupError(f"No catalogue match for '{item_identifier}'.")

        try:
            first = SearchMatch.model_validate(matches[0])
        except ValidationError as exc:
            raise CatalogueLookupError(
                f"Malformed search match for '{item_identifier}': {exc.error_count()} error(s)."
            ) from exc
        return str(first.pid)

    def fetch_page(self, entry_id: str) -> str:
        return self._request("GET", self.PAGE_URL.format(pid=entry_id)).text

    def extract(self, document: str) -> ExtractedItem:
        soup = BeautifulSoup(document, "html.parser")
        panel = soup.select_one(".productDetail")
        if panel is None:
            return ExtractedItem()

        return ExtractedItem(
            image_url=self._image_url(panel),
            specification=HTMLTableParser.table_rows(
                panel, region_selector=".productspec", expected_columns=2
            ),
            analogs=HTMLTableParser.table_rows(
                panel, region_selector=".productapp", expected_columns=2
            ),
            subassemblies=HTMLTableParser.table_rows(
                panel, region_selector=".subassembly", expected_columns=3
            ),
            # Couplings share the application table with analogs; single-cell rows only.
            couplings=HTMLTableParser.table_rows(
                panel, region_selector=".productapp", expected_columns=1
            ),
            usages=self._usages(panel),
        )

    @staticmethod
    def _image_url(panel: Tag) -> str | None:
        link = panel.select_one("[data-lightbox=product-image-set]")
        if link is None:
            return None
        href = link.get("href")
        return href if isinstance(href, str) and href else None

    @staticmethod
    def _usages(panel: Tag) -> list[tuple[str, str, str, str, str]]:
        usages: list[tuple[str, str, str, str, str]] = []
        for block in panel.select(":scope div.margintpless"):
            breadcrumb = HTMLTableParser.joined_text(block.select(":scope h5.panel-title .tooltips"))
            fields = HTMLTableParser.split_breadcrumb(breadcrumb)
            fields.extend(
                HTMLTableParser.clean_text(span.get_text()) for span in block.select(":scope table span")
            )
            trailing = HTMLTableParser.last_text_node(block.find_all("td"))
            fields.append(HTMLTableParser.clean_text(trailing))

            if len(fields) != USAGE_FIELD_COUNT:
                continue
            usages.append(tuple(fields))
        return usages
