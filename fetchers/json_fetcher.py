"""Fetcher reading records from a local JSON dump of the WordPress database."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from models import RawRecord
from .base_fetcher import BaseFetcher, FetcherError

logger = logging.getLogger('wp_markdown_export.fetcher.json')


class JsonFetcher(BaseFetcher):
    """
    Loads records from a JSON array of RawRecord dictionaries.

    Each entry carries id, type, title, slug, permalink, date_gmt, content,
    excerpt, thumbnail_url and meta. File order is preserved.
    """

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None):
        super().__init__(config, logger)

        json_path = config.get('source', {}).get('json_path')
        if not json_path:
            raise ValueError("source.json_path is required for JSON fetcher")
        self.json_path = Path(json_path)

    def fetch_records(self, post_types: List[str], limit: int) -> List[RawRecord]:
        self.logger.info(f"Reading records from {self.json_path}")

        try:
            with open(self.json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise FetcherError(f"JSON dump not found: {self.json_path}") from e
        except json.JSONDecodeError as e:
            raise FetcherError(f"Invalid JSON in {self.json_path}: {e}") from e

        if not isinstance(data, list):
            raise FetcherError(f"JSON dump must contain a list of records: {self.json_path}")

        records = []
        for index, item in enumerate(data):
            try:
                records.append(RawRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise FetcherError(f"Invalid record at index {index} in {self.json_path}: {e}") from e

        return self._apply_filters(records, post_types, limit)
