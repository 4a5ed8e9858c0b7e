"""Metadata fetcher protocol."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class PageMetadata:
    """Display fields scraped from a page, with defaults already applied."""

    url: str
    title: str
    description: str = ""
    favicon: str | None = None


class IMetadataFetcher(Protocol):
    """Protocol for bookmark enrichment backends."""

    async def fetch(self, url: str) -> PageMetadata:
        """
        Retrieve display metadata for a URL.

        Args:
            url: The URL as entered by the user (scheme optional)

        Returns:
            PageMetadata for the normalized URL. Never raises for network or
            parsing problems; missing fields carry their defaults.
        """
        ...
