"""Data models for the WordPress to Markdown export pipeline."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from dateutil.parser import isoparse

logger = logging.getLogger('wp_markdown_export')


class RecordType(Enum):
    """Supported content types, keyed by their WordPress post type."""
    ARTICLE = "post"
    PAGE = "page"
    MOVIE = "evans_movie"

    @property
    def layout(self) -> str:
        """Layout name used by the static site templates."""
        return _LAYOUTS[self]

    @classmethod
    def from_post_type(cls, post_type: str) -> Optional['RecordType']:
        """Return the RecordType for a post type, or None if unsupported."""
        try:
            return cls(post_type)
        except ValueError:
            return None


_LAYOUTS = {
    RecordType.ARTICLE: 'article',
    RecordType.PAGE: 'page',
    RecordType.MOVIE: 'movie',
}


@dataclass
class RawRecord:
    """A content record as returned by the source datastore."""

    id: Any
    post_type: str
    title: str
    slug: str
    permalink_url: str
    published_at: datetime
    body_html: str = ''
    excerpt: str = ''
    thumbnail_url: Optional[str] = None  # None: no thumbnail at all
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def record_type(self) -> Optional[RecordType]:
        return RecordType.from_post_type(self.post_type)

    def meta_values(self, key: str) -> List[Any]:
        """All values stored under a meta key (empty list when absent)."""
        value = self.meta.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def meta_value(self, key: str) -> Any:
        """First value stored under a meta key, or '' when absent."""
        values = self.meta_values(key)
        return values[0] if values else ''

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to the JSON dump format."""
        return {
            'id': self.id,
            'type': self.post_type,
            'title': self.title,
            'slug': self.slug,
            'permalink': self.permalink_url,
            'date_gmt': self.published_at.isoformat(),
            'content': self.body_html,
            'excerpt': self.excerpt,
            'thumbnail_url': self.thumbnail_url,
            'meta': self.meta,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawRecord':
        """Deserialize from the JSON dump format."""
        return cls(
            id=data['id'],
            post_type=data['type'],
            title=data.get('title', ''),
            slug=data['slug'],
            permalink_url=data.get('permalink', ''),
            published_at=parse_gmt(data['date_gmt']),
            body_html=data.get('content') or '',
            excerpt=data.get('excerpt') or '',
            thumbnail_url=data.get('thumbnail_url'),
            meta=data.get('meta') or {},
        )


def parse_gmt(value: Union[str, int, float, datetime]) -> datetime:
    """Parse a GMT timestamp (ISO string, Unix seconds or datetime) as aware UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        parsed = isoparse(str(value))

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class CanonicalRecord:
    """Normalized, type-specific record ready for front-matter serialization."""

    record_type: RecordType
    slug: str
    title: str
    permalink: str
    tags: List[str]
    excerpt: str
    featured_image: Union[str, bool]
    all_meta: Dict[str, List[Any]]
    body: str = ''
    published_at: Optional[datetime] = None
    date: Optional[str] = None
    showtimes: Optional[List[str]] = None
    rating: Optional[Dict[str, Any]] = None
    links: Union[List[Dict[str, Any]], bool, None] = None
    year: Optional[int] = None

    @property
    def layout(self) -> str:
        return self.record_type.layout

    def to_frontmatter(self) -> Dict[str, Any]:
        """Ordered front-matter mapping for this record's type."""
        frontmatter: Dict[str, Any] = {
            'title': self.title,
            'permalink': self.permalink,
        }

        if self.record_type is RecordType.MOVIE:
            frontmatter['showtime'] = list(self.showtimes or [])
        elif self.record_type is RecordType.ARTICLE:
            frontmatter['date'] = self.date

        frontmatter['excerpt'] = self.excerpt
        frontmatter['tags'] = list(self.tags)

        if self.record_type is RecordType.MOVIE:
            frontmatter['rating'] = self.rating

        frontmatter['featured_img'] = self.featured_image
        frontmatter['layout'] = self.layout

        if self.record_type is RecordType.MOVIE:
            frontmatter['links'] = self.links if self.links else False

        # In case we missed something.
        frontmatter['all_meta'] = self.all_meta

        return frontmatter


__all__ = [
    'RecordType',
    'RawRecord',
    'CanonicalRecord',
    'parse_gmt',
]
