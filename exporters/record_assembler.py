"""Per-type assembly of canonical records and their output paths."""

import logging
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import Any, Dict, Optional, Tuple

from config_loader import get_nested
from converters import (
    MarkdownConverter,
    dedup_meta,
    format_showtimes,
    format_timestamp,
    resolve_featured_image,
    resolve_links,
    resolve_rating,
    resolve_showtimes,
    showtime_year,
    strip_host,
)
from models import CanonicalRecord, RawRecord, RecordType


class RecordAssembler(ABC):
    """Builds a CanonicalRecord for one record type and locates its file."""

    record_type: RecordType
    tags: Tuple[str, ...] = ()

    def __init__(
        self,
        converter: Optional[MarkdownConverter] = None,
        featured_image_mode: str = 'local',
        image_directory: str = '/images/feature',
        logger: Optional[logging.Logger] = None
    ):
        self.converter = converter or MarkdownConverter()
        self.featured_image_mode = featured_image_mode
        self.image_directory = image_directory
        self.logger = logger or logging.getLogger('wp_markdown_export.exporters.assembler')

    def assemble(self, raw: RawRecord) -> CanonicalRecord:
        """
        Build the canonical record for a raw record.

        Args:
            raw: Record of this assembler's type

        Returns:
            Fully populated CanonicalRecord
        """
        record = CanonicalRecord(
            record_type=self.record_type,
            slug=raw.slug,
            title=raw.title,
            permalink=strip_host(raw.permalink_url),
            tags=list(self.tags),
            excerpt=raw.excerpt,
            featured_image=resolve_featured_image(
                raw, self.featured_image_mode, self.image_directory
            ),
            all_meta=dedup_meta(raw.meta),
            body=self.converter.to_markdown(raw.body_html),
            published_at=raw.published_at,
        )
        self._add_type_fields(raw, record)
        return record

    def _add_type_fields(self, raw: RawRecord, record: CanonicalRecord) -> None:
        """Hook for type-specific fields."""

    @abstractmethod
    def output_path(self, record: CanonicalRecord) -> PurePosixPath:
        """Path of the record's Markdown file, relative to the output directory."""


class ArticleAssembler(RecordAssembler):
    """Blog posts, partitioned by publication date."""

    record_type = RecordType.ARTICLE
    tags = ('post', 'article', 'news')

    def _add_type_fields(self, raw: RawRecord, record: CanonicalRecord) -> None:
        record.date = format_timestamp(raw.published_at)

    def output_path(self, record: CanonicalRecord) -> PurePosixPath:
        published = record.published_at
        return PurePosixPath(
            'article',
            f"{published:%Y}",
            f"{published:%m}",
            f"{published:%d}",
            f"{record.slug}.md"
        )


class PageAssembler(RecordAssembler):
    record_type = RecordType.PAGE
    tags = ('page',)

    def output_path(self, record: CanonicalRecord) -> PurePosixPath:
        return PurePosixPath('page', f"{record.slug}.md")


class MovieAssembler(RecordAssembler):
    """Movies, filed under the year of their first showtime."""

    record_type = RecordType.MOVIE
    tags = ('movie',)

    def _add_type_fields(self, raw: RawRecord, record: CanonicalRecord) -> None:
        showtimes = resolve_showtimes(raw)
        record.year = showtime_year(showtimes)
        self.logger.debug(f"Record {raw.id} showtime year: {record.year}")

        record.showtimes = format_showtimes(showtimes)
        record.tags = [*self.tags, f"movie-{record.year}"]
        record.rating = resolve_rating(raw)
        record.links = resolve_links(raw)

    def output_path(self, record: CanonicalRecord) -> PurePosixPath:
        return PurePosixPath('movie', str(record.year), f"{record.slug}.md")


def build_assemblers(
    config: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> Dict[RecordType, RecordAssembler]:
    """
    Create the RecordType-keyed dispatch table.

    Args:
        config: Configuration dictionary (export.* settings are read)
        logger: Optional logger shared by the assemblers

    Returns:
        Mapping of record type to its assembler
    """
    config = config or {}
    converter = MarkdownConverter(logger=logger)
    options = {
        'converter': converter,
        'featured_image_mode': get_nested(config, 'export.featured_image_mode', 'local'),
        'image_directory': get_nested(config, 'export.image_directory', '/images/feature'),
        'logger': logger,
    }
    assemblers = [ArticleAssembler(**options), PageAssembler(**options), MovieAssembler(**options)]
    return {assembler.record_type: assembler for assembler in assemblers}


__all__ = [
    'RecordAssembler',
    'ArticleAssembler',
    'PageAssembler',
    'MovieAssembler',
    'build_assemblers',
]
