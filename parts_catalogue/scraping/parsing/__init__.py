"""
HTML parsing helpers.
"""

from parts_catalogue.scraping.parsing.html_tables import HTMLTableParser

__all__ = ["HTMLTableParser"]
