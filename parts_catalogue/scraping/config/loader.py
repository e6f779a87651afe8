"""
Environment-driven settings loader for catalogue scraping.
"""

from __future__ import annotations

import os
from functools import lru_cache

from parts_catalogue.env import load_env_files
from parts_catalogue.scraping.config.models import ScrapeSettings

_DEFAULTS = ScrapeSettings()


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def load_scrape_settings() -> ScrapeSettings:
    """
    Build scraper settings from environment variables.
    """

    load_env_files()
    return ScrapeSettings(
        input_path=_get_str_env("PARTS_SCRAPE_INPUT_PATH", _DEFAULTS.input_path),
        image_dir_template=_get_str_env("PARTS_SCRAPE_IMAGE_DIR", _DEFAULTS.image_dir_template),
        output_dir=_get_str_env("PARTS_SCRAPE_OUTPUT_DIR", _DEFAULTS.output_dir),
        error_log_path=_get_str_env("PARTS_SCRAPE_ERROR_LOG", _DEFAULTS.error_log_path),
        concurrency=max(
            1,
            _get_int_env("PARTS_SCRAPE_CONCURRENCY", _DEFAULTS.concurrency),
        ),
        timeout_seconds=max(
            1.0,
            _get_float_env("PARTS_SCRAPE_TIMEOUT_SECONDS", _DEFAULTS.timeout_seconds),
        ),
        user_agent=_get_str_env("PARTS_SCRAPE_USER_AGENT", _DEFAULTS.user_agent),
        csv_batch_size=max(
            1,
            _get_int_env("PARTS_SCRAPE_CSV_BATCH_SIZE", _DEFAULTS.csv_batch_size),
        ),
    )


@lru_cache(maxsize=1)
def get_scrape_settings() -> ScrapeSettings:
    """
    Return cached scraper settings from environment variables.
    """

    return load_scrape_settings()
