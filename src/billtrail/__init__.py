"""billtrail - utility bill scraping with content-hash deduplication."""

__version__ = "0.1.0"
