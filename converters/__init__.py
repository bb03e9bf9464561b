"""Converters package: block markup cleanup, HTML to Markdown, and field resolution."""

import logging

from .field_resolvers import (
    MalformedShowtimeError,
    format_showtimes,
    format_timestamp,
    resolve_featured_image,
    resolve_links,
    resolve_rating,
    resolve_showtimes,
    showtime_year,
)
from .html_cleaner import BlockMarkupCleaner
from .markdown_converter import MarkdownConverter, convert_body
from .text_normalizer import dedup_meta, dedup_values, is_blank, strip_host

logger = logging.getLogger('wp_markdown_export.converters')

__all__ = [
    'BlockMarkupCleaner',
    'MarkdownConverter',
    'convert_body',
    'MalformedShowtimeError',
    'format_showtimes',
    'format_timestamp',
    'resolve_featured_image',
    'resolve_links',
    'resolve_rating',
    'resolve_showtimes',
    'showtime_year',
    'dedup_meta',
    'dedup_values',
    'is_blank',
    'strip_host',
]
