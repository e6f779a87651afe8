"""
Run a catalogue scrape from the command line.

    parts-catalogue-scrape [input.csv] [image-dir-template]

The image directory template may contain `%%brand%%`, replaced by each
brand name (default: out/%%brand%%/img).
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
from pathlib import Path

from parts_catalogue.scraping.config import get_scrape_settings
from parts_catalogue.scraping.engine import CatalogueScrapingEngine
from parts_catalogue.scraping.errors import ConfigurationError
from parts_catalogue.scraping.input_reader import read_queries
from parts_catalogue.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """
    Configure root logging once for the CLI process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Scrape part details from supported catalogues.")
    parser.add_argument(
        "input_path",
        nargs="?",
        default=None,
        help="CSV with 'Brand' and 'Part' columns (default: all.csv).",
    )
    parser.add_argument(
        "image_dir",
        nargs="?",
        default=None,
        help="Image directory template; '%%%%brand%%%%' is replaced by the brand.",
    )
    args = parser.parse_args(argv)

    _configure_logging()
    settings = get_scrape_settings()
    overrides = {
        key: value
        for key, value in (("input_path", args.input_path), ("image_dir_template", args.image_dir))
        if value
    }
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    try:
        queries = read_queries(Path(settings.input_path))
        summary = CatalogueScrapingEngine(settings=settings).run(queries)
    except ConfigurationError as exc:
        log_event(logger, logging.ERROR, "configuration_error", error=str(exc))
        return 2

    print(json.dumps(dataclasses.asdict(summary), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
