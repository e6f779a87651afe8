"""
Scraping configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from parts_catalogue.scraping.types import OutputChannel

BRAND_PLACEHOLDER = "%%brand%%"


@dataclass(frozen=True)
class ChannelOutput:
    """
    File name and header row for one tabular output channel.
    """

    file_name: str
    columns: tuple[str, ...]


CHANNEL_OUTPUTS = MappingProxyType(
    {
        OutputChannel.SPECIFICATION: ChannelOutput(
            file_name="specification.csv",
            columns=("Brand", "Part Number", "Parameter", "Value"),
        ),
        OutputChannel.ANALOG: ChannelOutput(
            file_name="crosses.csv",
            columns=("Brand", "Part Number", "OWNER", "NUMBER"),
        ),
        OutputChannel.SUBASSEMBLY: ChannelOutput(
            file_name="subassembly.csv",
            columns=("Brand", "Part Number", "Brand", "Part", "Type"),
        ),
        OutputChannel.COUPLE: ChannelOutput(
            file_name="couple.csv",
            columns=("Brand", "Part Number", "Number"),
        ),
        OutputChannel.USAGE: ChannelOutput(
            file_name="usage.csv",
            columns=("Brand", "Part Number", "Brand", "Model", "Year", "Engine", "Description"),
        ),
    }
)


@dataclass(frozen=True)
class ScrapeSettings:
    """
    Runtime settings for one catalogue scrape run.
    """

    input_path: str = "all.csv"
    image_dir_template: str = f"out/{BRAND_PLACEHOLDER}/img"
    output_dir: str = "out"
    error_log_path: str = "errors.csv"
    concurrency: int = 4
    timeout_seconds: float = 30.0
    user_agent: str = "PartsCatalogueBot/1.0"
    csv_batch_size: int = 500

    def channel_path(self, *, brand: str, channel: str) -> Path:
        return Path(self.output_dir) / brand / CHANNEL_OUTPUTS[channel].file_name

    def image_dir(self, brand: str) -> Path:
        return Path(self.image_dir_template.replace(BRAND_PLACEHOLDER, brand))
