"""
tests/test_catalogue_source.py

Page lookup failure folding and brand registry dispatch.
"""

from __future__ import annotations

import pytest
import requests
from conftest import PAGE_URL, SEARCH_URL, FakeResponse, FakeSession

from parts_catalogue.scraping.config.models import ScrapeSettings
from parts_catalogue.scraping.errors import ConfigurationError, UnsupportedBrandError
from parts_catalogue.scraping.registry import SourceRegistry
from parts_catalogue.scraping.sources import JikiuCatalogueSource
from parts_catalogue.scraping.types import CatalogueQuery, FetchResult

QUERY = CatalogueQuery(brand="jikiu", item_identifier="ABC123")


def _source(session: FakeSession) -> JikiuCatalogueSource:
    return JikiuCatalogueSource(settings=ScrapeSettings(timeout_seconds=7.0), session=session)


class TestFetch:
    def test_first_match_page_is_returned(self) -> None:
        session = FakeSession(
            search={"ABC123": [{"pid": 77}, {"pid": 78}]},
            pages={PAGE_URL.format(pid=77): "<html>77</html>", PAGE_URL.format(pid=78): "<html>78</html>"},
        )

        result = _source(session).fetch(QUERY)

        assert result == FetchResult(success=True, document="<html>77</html>")

    def test_search_request_shape(self) -> None:
        session = FakeSession(
            search={"ABC123": [{"pid": "p-1"}]},
            pages={PAGE_URL.format(pid="p-1"): "<html></html>"},
        )

        _source(session).fetch(QUERY)

        search_call, page_call = session.calls
        assert search_call["method"] == "POST"
        assert search_call["url"] == SEARCH_URL
        assert search_call["json"] == {"search_part": "ABC123"}
        assert search_call["headers"]["X-Requested-With"] == "XMLHttpRequest"
        assert search_call["headers"]["Accept"] == "application/json"
        assert page_call["url"] == PAGE_URL.format(pid="p-1")
        assert {call["timeout"] for call in session.calls} == {7.0}

    @pytest.mark.parametrize(
        "search_response",
        [
            [],
            [None],
            [{}],
            [{"name": "no pid"}],
            {"pid": 77},
            "not a list",
        ],
    )
    def test_unusable_search_response_is_a_failed_fetch(self, search_response: object) -> None:
        session = FakeSession(search={"ABC123": search_response})

        result = _source(session).fetch(QUERY)

        assert result.success is False
        assert result.document is None
        assert len(session.calls) == 1

    def test_transport_errors_do_not_escape(self) -> None:
        session = FakeSession(search={"ABC123": requests.ConnectionError("dns")})

        assert _source(session).fetch(QUERY) == FetchResult.failed()

    def test_timeout_on_page_request_does_not_escape(self) -> None:
        session = FakeSession(
            search={"ABC123": [{"pid": 1}]},
            pages={PAGE_URL.format(pid=1): requests.Timeout("slow")},
        )

        assert _source(session).fetch(QUERY).success is False

    def test_page_http_error_is_a_failed_fetch(self) -> None:
        session = FakeSession(search={"ABC123": [{"pid": 404}]})

        assert _source(session).fetch(QUERY).success is False

    def test_invalid_json_is_a_failed_fetch(self) -> None:
        session = FakeSession(
            search={"ABC123": FakeResponse(json_data=ValueError("Expecting value"))}
        )

        assert _source(session).fetch(QUERY).success is False


class TestSourceRegistry:
    def test_resolves_builtin_brand_case_insensitively(self) -> None:
        registry = SourceRegistry()

        assert registry.resolve("Jikiu") is JikiuCatalogueSource
        assert registry.brands == ["jikiu"]

    def test_unsupported_brand_is_a_configuration_error(self) -> None:
        with pytest.raises(UnsupportedBrandError) as ctx:
            SourceRegistry().resolve("Bosch")

        assert isinstance(ctx.value, ConfigurationError)
        assert ctx.value.brand == "Bosch"
        assert "jikiu" in str(ctx.value)

    def test_create_sources_builds_one_source_per_brand(self) -> None:
        sources = SourceRegistry().create_sources(
            brands=["jikiu", "JIKIU", " jikiu "],
            settings=ScrapeSettings(),
            session=FakeSession(),  # type: ignore[arg-type]
        )

        assert list(sources) == ["jikiu"]
        assert isinstance(sources["jikiu"], JikiuCatalogueSource)

    def test_registered_brand_is_dispatched(self) -> None:
        class OtherSource(JikiuCatalogueSource):
            brand = "other"

        registry = SourceRegistry()
        registry.register(brand="Other", source_class=OtherSource)

        source = registry.create_source(
            brand="other",
            settings=ScrapeSettings(),
            session=FakeSession(),  # type: ignore[arg-type]
        )
        assert isinstance(source, OtherSource)
