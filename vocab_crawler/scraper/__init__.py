"""Scraper package — page fetch & selector callbacks."""

from vocab_crawler.scraper.collector import Collector, VisitError
from vocab_crawler.scraper.fetcher import fetch_url
from vocab_crawler.scraper.models import HTMLElement, RawPage

__all__ = ["Collector", "VisitError", "fetch_url", "HTMLElement", "RawPage"]
