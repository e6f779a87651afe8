"""
Output sink exports.
"""

from parts_catalogue.scraping.storage.base import RecordSink
from parts_catalogue.scraping.storage.csv_storage import CsvChannelSink
from parts_catalogue.scraping.storage.error_log import ErrorLog
from parts_catalogue.scraping.storage.image_storage import ImageDownloadSink

__all__ = ["CsvChannelSink", "ErrorLog", "ImageDownloadSink", "RecordSink"]
