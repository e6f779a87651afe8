"""
Catalogue source registry keyed by brand.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import requests

from parts_catalogue.scraping.base import CatalogueSource
from parts_catalogue.scraping.config.models import ScrapeSettings
from parts_catalogue.scraping.errors import UnsupportedBrandError
from parts_catalogue.scraping.sources import JikiuCatalogueSource


class SourceRegistry:
    """
    Maps brand identifiers to catalogue source classes.
    """

    def __init__(self, registrations: Mapping[str, type[CatalogueSource]] | None = None) -> None:
        builtins: dict[str, type[CatalogueSource]] = {
            JikiuCatalogueSource.brand: JikiuCatalogueSource,
        }
        if registrations:
            builtins.update({brand.strip().lower(): cls for brand, cls in registrations.items()})
        self._registrations = builtins

    def register(self, *, brand: str, source_class: type[CatalogueSource]) -> None:
        self._registrations[brand.strip().lower()] = source_class

    @property
    def brands(self) -> list[str]:
        return sorted(self._registrations)

    def resolve(self, brand: str) -> type[CatalogueSource]:
        resolved = self._registrations.get(brand.strip().lower())
        if resolved is None:
            raise UnsupportedBrandError(brand, self.brands)
        return resolved

    def create_source(
        self,
        *,
        brand: str,
        settings: ScrapeSettings,
        session: requests.Session,
    ) -> CatalogueSource:
        source_class = self.resolve(brand)
        return source_class(settings=settings, session=session)

    def create_sources(
        self,
        *,
        brands: Iterable[str],
        settings: ScrapeSettings,
        session: requests.Session,
    ) -> dict[str, CatalogueSource]:
        """
        Build one source per distinct brand, failing on the first unsupported one.
        """

        sources: dict[str, CatalogueSource] = {}
        for brand in brands:
            key = brand.strip().lower()
            if key not in sources:
                sources[key] = self.create_source(brand=key, settings=settings, session=session)
        return sources
