"""
Catalogue source exports.
"""

from parts_catalogue.scraping.sources.jikiu import JikiuCatalogueSource

__all__ = ["JikiuCatalogueSource"]
