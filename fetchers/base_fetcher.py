"""Abstract base fetcher interface and common functionality."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from models import RawRecord


class FetcherError(Exception):
    """Base exception for fetcher-related errors."""
    pass


class BaseFetcher(ABC):
    """Abstract base class for WordPress content fetchers."""

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None):
        """
        Initialize base fetcher with configuration and logger.

        Args:
            config: Configuration dictionary
            logger: Logger instance (optional, uses module logger if not provided)
        """
        self.config = config
        self.logger = logger or logging.getLogger('wp_markdown_export.fetcher')

    @abstractmethod
    def fetch_records(self, post_types: List[str], limit: int) -> List[RawRecord]:
        """
        Fetch content records of the given post types.

        Args:
            post_types: Post type names to include
            limit: Maximum number of records to return

        Returns:
            Records in the source's query order
        """
        pass

    def _apply_filters(
        self,
        records: List[RawRecord],
        post_types: List[str],
        limit: int
    ) -> List[RawRecord]:
        """Keep records of the requested types, capped at limit."""
        wanted = set(post_types)
        filtered = [record for record in records if record.post_type in wanted]

        if len(filtered) > limit:
            self.logger.warning(
                f"Source holds {len(filtered)} matching records; only the first {limit} are exported"
            )
            filtered = filtered[:limit]

        self.logger.debug(f"Filtered {len(records)} records down to {len(filtered)}")
        return filtered

    @staticmethod
    def _html_to_text(html: str) -> str:
        """Reduce rendered HTML (e.g. an excerpt) to plain text."""
        if not html:
            return ''
        return BeautifulSoup(html, 'lxml').get_text(' ', strip=True)


__all__ = ['BaseFetcher', 'FetcherError']
