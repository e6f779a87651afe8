"""
Config helpers for catalogue scraping.
"""

from parts_catalogue.scraping.config.loader import get_scrape_settings
from parts_catalogue.scraping.config.models import CHANNEL_OUTPUTS, ChannelOutput, ScrapeSettings

__all__ = [
    "CHANNEL_OUTPUTS",
    "ChannelOutput",
    "ScrapeSettings",
    "get_scrape_settings",
]
