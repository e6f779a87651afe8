"""
Exceptions raised by the catalogue scraping pipeline.
"""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """
    Fatal setup problem; aborts the whole run.
    """


class UnsupportedBrandError(ConfigurationError):
    """
    Raised when no catalogue source is registered for a brand.
    """

    def __init__(self, brand: str, allowed: list[str]) -> None:
        self.brand = brand
        self.allowed = allowed
        super().__init__(
            f"Unsupported brand: '{brand}'. Allowed brands: {', '.join(allowed) or 'none'}."
        )


class InputFormatError(ConfigurationError):
    """
    Raised when the input list is missing its required header columns.
    """


class CatalogueLookupError(RuntimeError):
    """
    Raised inside a source when a search yields no usable catalogue entry.
    """
