"""API fetcher implementation for retrieving WordPress content via the REST API."""

import logging
from typing import Any, Dict, List, Optional

from models import RawRecord, parse_gmt
from wordpress_client import WordPressClient
from .base_fetcher import BaseFetcher, FetcherError

logger = logging.getLogger('wp_markdown_export.fetcher.api')

DEFAULT_REST_BASES = {
    'post': 'posts',
    'page': 'pages',
}


class ApiFetcher(BaseFetcher):
    """Fetches WordPress content through the wp/v2 REST endpoints."""

    def __init__(
        self,
        config: Dict[str, Any],
        logger: Optional[logging.Logger] = None,
        client: Optional[WordPressClient] = None
    ):
        """
        Initialize API fetcher with configuration.

        Args:
            config: Configuration dictionary with source and advanced settings
            logger: Logger instance (optional)
            client: Preconfigured client (built from config when omitted)
        """
        super().__init__(config, logger)

        source_config = config.get('source', {})
        if client is None and not source_config.get('base_url'):
            raise ValueError("source.base_url is required for API fetcher")

        self.client = client or WordPressClient.from_config(config)
        self.rest_bases = {**DEFAULT_REST_BASES, **source_config.get('rest_bases', {})}

    def fetch_records(self, post_types: List[str], limit: int) -> List[RawRecord]:
        """
        Fetch records of every post type, merged newest first.

        Each type is queried separately, so the merged list is re-sorted by
        publication date before the limit is applied.
        """
        records: List[RawRecord] = []

        for post_type in post_types:
            rest_base = self.rest_bases.get(post_type, post_type)
            self.logger.info(f"Fetching {post_type} records from /wp/v2/{rest_base}")
            items = self.client.get_items(rest_base, limit)

            for item in items:
                try:
                    records.append(self._build_record(item, post_type))
                except (AttributeError, KeyError, TypeError, ValueError) as e:
                    item_id = item.get('id', '?') if isinstance(item, dict) else '?'
                    raise FetcherError(
                        f"Unexpected REST payload for {post_type} item {item_id}: {e}"
                    ) from e

        records.sort(key=lambda record: record.published_at, reverse=True)
        return self._apply_filters(records, post_types, limit)

    def _build_record(self, item: Dict[str, Any], post_type: str) -> RawRecord:
        """Map a REST item to a RawRecord."""
        return RawRecord(
            id=item['id'],
            post_type=item.get('type', post_type),
            title=self._rendered(item.get('title')),
            slug=item['slug'],
            permalink_url=item.get('link', ''),
            published_at=parse_gmt(item['date_gmt']),
            body_html=self._rendered(item.get('content')),
            excerpt=self._html_to_text(self._rendered(item.get('excerpt'))),
            thumbnail_url=self._featured_media_url(item),
            meta=item.get('meta') or {},
        )

    @staticmethod
    def _rendered(field: Any) -> str:
        """Extract the rendered value of a REST text field."""
        if isinstance(field, dict):
            return field.get('rendered', '') or ''
        return field or ''

    @staticmethod
    def _featured_media_url(item: Dict[str, Any]) -> Optional[str]:
        """Source URL of the embedded featured image, None without one."""
        if not item.get('featured_media'):
            return None

        media = item.get('_embedded', {}).get('wp:featuredmedia') or []
        if not media or not isinstance(media[0], dict):
            return ''
        return media[0].get('source_url', '') or ''
