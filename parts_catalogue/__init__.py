"""
Parts catalogue scraper.

Looks up (brand, part number) pairs on supported parts-catalogue sites and
writes the extracted attributes as per-brand CSV datasets plus product images.
"""
