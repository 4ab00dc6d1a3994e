"""Page fetching collaborators."""

from .base import PageFetcher, TransientFetchError
from .html_page import PageContent, parse_page
from .http_fetcher import HttpFetcher

__all__ = [
    "PageFetcher",
    "TransientFetchError",
    "PageContent",
    "parse_page",
    "HttpFetcher",
]
