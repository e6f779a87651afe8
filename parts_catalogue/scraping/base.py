"""
Base catalogue source abstraction.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from parts_catalogue.scraping.config.models import ScrapeSettings
from parts_catalogue.scraping.errors import CatalogueLookupError
from parts_catalogue.scraping.logging_utils import log_event
from parts_catalogue.scraping.types import CatalogueQuery, ExtractedItem, FetchResult

logger = logging.getLogger(__name__)


class CatalogueSource(ABC):
    """
    One supported catalogue site: page lookup plus its markup schema.

    Subclasses provide the search/page requests and `extract`; `fetch` owns
    the failure policy and never raises for transport or lookup problems.
    """

    brand: str = ""

    def __init__(
        self,
        *,
        settings: ScrapeSettings,
        session: requests.Session,
    ) -> None:
        self.settings = settings
        self.session = session
        self.request_headers = {"User-Agent": settings.user_agent}

    def fetch(self, query: CatalogueQuery) -> FetchResult:
        """
        Resolve `query` to the raw markup of its catalogue page.
        """

        try:
            entry_id = self.search(query.item_identifier)
            document = self.fetch_page(entry_id)
        except (requests.RequestException, CatalogueLookupError, ValueError) as exc:
            log_event(
                logger,
                logging.DEBUG,
                "catalogue_fetch_failed",
                brand=query.brand,
                item=query.item_identifier,
                error=str(exc),
            )
            return FetchResult.failed()
        return FetchResult(success=True, document=document)

    @abstractmethod
    def search(self, item_identifier: str) -> str:
        """
        Return the internal catalogue id of the first search match.

        Raises CatalogueLookupError when nothing usable matches.
        """

    @abstractmethod
    def fetch_page(self, entry_id: str) -> str:
        """
        Return the product page markup for a catalogue id.
        """

    @abstractmethod
    def extract(self, document: str) -> ExtractedItem:
        """
        Convert product page markup into structured row groups.
        """

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        headers = {**self.request_headers, **kwargs.pop("headers", {})}
        response = self.session.request(
            method,
            url,
            headers=headers,
            timeout=self.settings.timeout_seconds,
            **kwargs,
        )
        response.raise_for_status()
        return response
