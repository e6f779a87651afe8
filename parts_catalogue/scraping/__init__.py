"""
Catalogue scraping pipeline: fetch, extract, route and write.
"""
