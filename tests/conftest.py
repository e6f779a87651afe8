"""
Shared fixtures: an in-memory stand-in for `requests.Session` and sample pages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests

from parts_catalogue.scraping.config.models import ScrapeSettings

SEARCH_URL = "https://www.jikiu.com/service/get_part_number"
PAGE_URL = "https://www.jikiu.com/catalogue/{pid}"


class FakeResponse:
    def __init__(
        self,
        *,
        json_data: Any = None,
        text: str = "",
        content: bytes = b"",
        status_code: int = 200,
    ) -> None:
        self._json_data = json_data
        self.text = text
        self.content = content
        self.status_code = status_code

    def json(self) -> Any:
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status={self.status_code}", response=self)

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


class FakeSession:
    """
    Answers search POSTs from `search`, page GETs from `pages` and image GETs
    from `images`. Values that are exceptions are raised instead.
    """

    def __init__(
        self,
        *,
        search: dict[str, Any] | None = None,
        pages: dict[str, Any] | None = None,
        images: dict[str, Any] | None = None,
    ) -> None:
        self.search = search or {}
        self.pages = pages or {}
        self.images = images or {}
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if method == "POST" and url == SEARCH_URL:
            outcome = self.search.get(kwargs["json"]["search_part"], [])
            if isinstance(outcome, BaseException):
                raise outcome
            if isinstance(outcome, FakeResponse):
                return outcome
            return FakeResponse(json_data=outcome)

        outcome = self.pages.get(url)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            return FakeResponse(status_code=404)
        return FakeResponse(text=outcome)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, **kwargs})
        outcome = self.images.get(url)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            raise requests.ConnectionError(f"unreachable: {url}")
        return FakeResponse(content=outcome)


def product_page(
    *,
    image_url: str | None = None,
    spec_rows: str = "",
    app_rows: str = "",
    subassembly_rows: str = "",
    usage_blocks: str = "",
) -> str:
    image = f'<a data-lightbox="product-image-set" href="{image_url}">photo</a>' if image_url else ""
    return f"""
    <html><body>
      <div class="productDetail">
        {image}
        <div class="productspec"><table><tbody>{spec_rows}</tbody></table></div>
        <div class="productapp"><table><tbody>{app_rows}</tbody></table></div>
        <div class="subassembly"><table><tbody>{subassembly_rows}</tbody></table></div>
        {usage_blocks}
      </div>
    </body></html>
    """


USAGE_BLOCK = """
<div class="margintpless">
  <h5 class="panel-title"><a class="tooltips">Toyota » Corolla » 2010-2015</a></h5>
  <table><tbody><tr><td><span>  1.6
  \t VVT-i  </span> Front axle,
     left side </td></tr></tbody></table>
</div>
"""


@pytest.fixture()
def full_page() -> str:
    return product_page(
        image_url="https://www.jikiu.com/upload/products/X1.jpg",
        spec_rows=(
            "<tr><td>Length</td><td>50mm</td></tr>"
            '<tr><td colspan="2">Dimensions</td></tr>'
            "<tr><td>Weight</td><td>1.2kg</td></tr>"
        ),
        app_rows=(
            "<tr><td>TOYOTA</td><td>48820-12345</td></tr>"
            "<tr><td>CP-100</td></tr>"
            "<tr><td>a</td><td>b</td><td>c</td></tr>"
        ),
        subassembly_rows="<tr><td>JIKIU</td><td>BH-001</td><td>Bushing</td></tr>",
        usage_blocks=USAGE_BLOCK,
    )


@pytest.fixture()
def settings(tmp_path: Path) -> ScrapeSettings:
    return ScrapeSettings(
        input_path=str(tmp_path / "input.csv"),
        image_dir_template=str(tmp_path / "out" / "%%brand%%" / "img"),
        output_dir=str(tmp_path / "out"),
        error_log_path=str(tmp_path / "errors.csv"),
        concurrency=2,
        timeout_seconds=5.0,
        csv_batch_size=2,
    )
