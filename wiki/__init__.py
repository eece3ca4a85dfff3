"""Wikipedia integration modules."""

from wiki.client import FetchError, WikipediaSearchClient

__all__ = ["FetchError", "WikipediaSearchClient"]
