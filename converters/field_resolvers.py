"""Resolvers deriving canonical field values from loosely-typed post metadata."""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple, Union

from dateutil.parser import isoparse

from models import RawRecord
from .text_normalizer import dedup_values, is_blank

logger = logging.getLogger('wp_markdown_export.converters.resolvers')

META_PREFIX = '_evans_'
SHOWTIME_KEY = META_PREFIX + 'showtime'
LEGACY_SHOWTIME_KEYS = [f'{SHOWTIME_KEY}{i}' for i in range(1, 4)]
RATING_KEY = META_PREFIX + 'rating'
RATING_FIELDS = ['rating', 'detail']
LINKS_KEY = META_PREFIX + 'url'
LINK_NAME_KEY = META_PREFIX + 'url_name'

DEFAULT_LINK_TEXT = 'Official Site'
DEFAULT_IMAGE_DIRECTORY = '/images/feature'
FEATURED_IMAGE_MODES = ('local', 'original')


class MalformedShowtimeError(Exception):
    """Raised when a movie's showtimes cannot select a valid output year."""

    def __init__(self, record_id: Any, showtimes: List[Any]):
        self.record_id = record_id
        self.showtimes = showtimes
        super().__init__(
            f"Malformed showtime data for record {record_id}: {showtimes!r}"
        )


def is_timestamp_like(value: Any) -> bool:
    """
    Check whether a value denotes an instant (Unix seconds or ISO string).

    The instant must be finite and representable as a UTC datetime.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return False

    try:
        seconds = to_timestamp(value)
        if not math.isfinite(seconds):
            return False
        datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return False
    return True


def to_timestamp(value: Union[int, float, str]) -> float:
    """
    Convert a showtime value to Unix seconds.

    Raises:
        ValueError: If a string is neither numeric nor an ISO-8601 date
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    text = str(value).strip()
    try:
        return float(text)
    except ValueError:
        parsed = isoparse(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def to_datetime(value: Union[int, float, str, datetime]) -> datetime:
    """Convert a timestamp-like value to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.fromtimestamp(to_timestamp(value), tz=timezone.utc)


def format_timestamp(value: Union[int, float, str, datetime]) -> str:
    """Render a timestamp as 'YYYY-MM-DD h:mm:ss am|pm' (UTC)."""
    moment = to_datetime(value)
    hour = moment.hour % 12 or 12
    meridiem = 'am' if moment.hour < 12 else 'pm'
    return f"{moment:%Y-%m-%d} {hour}:{moment:%M:%S} {meridiem}"


def _showtime_sort_key(value: Any) -> Tuple[int, float]:
    # Malformed entries sort first so the first-element check catches them
    if is_timestamp_like(value):
        return (1, to_timestamp(value))
    return (0, 0.0)


def _showtime_identity(value: Any) -> Any:
    if is_timestamp_like(value):
        return ('instant', to_timestamp(value))
    return ('raw', type(value), value)


def normalize_showtimes(data: Any) -> List[Any]:
    """
    Normalize a resolved showtime value into a dense, sorted, unique list.

    Args:
        data: Showtime value(s) as found in the metadata

    Returns:
        Sorted list without duplicates or empty entries
    """
    if not isinstance(data, list):
        data = [data]
    if data and isinstance(data[0], list):
        data = data[0]

    data = [value for value in data if not is_blank(value)]
    data = sorted(data, key=_showtime_sort_key)
    return dedup_values(data, key=_showtime_identity)


def resolve_showtimes(record: RawRecord) -> List[Any]:
    """
    Resolve a movie's showtimes from its metadata.

    The first non-empty source wins: the multi-valued showtime key, then the
    three legacy single-value keys, then the publication date.

    Args:
        record: Movie record

    Returns:
        Normalized list of timestamp-like values

    Raises:
        MalformedShowtimeError: If the first normalized value is not a timestamp
    """
    showtimes = [value for value in record.meta_values(SHOWTIME_KEY) if not is_blank(value)]

    if not showtimes:
        # Old style: one key per showing
        showtimes = [record.meta_value(key) for key in LEGACY_SHOWTIME_KEYS]
        showtimes = [value for value in showtimes if not is_blank(value)]

    if not showtimes:
        showtimes = [int(record.published_at.timestamp())]

    showtimes = normalize_showtimes(showtimes)

    if not showtimes or not is_timestamp_like(showtimes[0]):
        raise MalformedShowtimeError(record.id, showtimes)

    return showtimes


def showtime_year(showtimes: List[Any]) -> int:
    """Year of the earliest normalized showtime."""
    return to_datetime(showtimes[0]).year


def format_showtimes(showtimes: List[Any]) -> List[str]:
    return [format_timestamp(showtime) for showtime in showtimes]


def resolve_rating(record: RawRecord) -> Dict[str, Any]:
    """
    Resolve the rating mapping; both keys are always present.

    Missing or empty sub-values become False.
    """
    stored = record.meta_value(RATING_KEY)
    if not isinstance(stored, dict):
        stored = {}

    rating = {}
    for key in RATING_FIELDS:
        value = stored.get(META_PREFIX + key)
        if is_blank(value):
            value = stored.get(key)
        rating[key] = False if is_blank(value) else value
    return rating


def resolve_links(record: RawRecord) -> Union[List[Dict[str, Any]], bool]:
    """
    Resolve the movie's external links.

    Returns:
        False when no links are stored, otherwise a list of {url, text}
        mappings
    """
    links = record.meta_values(LINKS_KEY)
    if links and isinstance(links[0], list):
        links = links[0]
    links = [link for link in links if not is_blank(link)]
    if not links:
        return False

    resolved = []
    for link in dedup_values(links):
        if isinstance(link, dict):
            resolved.append({
                'url': link.get(LINKS_KEY, link.get('url', '')),
                'text': link.get(LINK_NAME_KEY, link.get('name', DEFAULT_LINK_TEXT)),
            })
        else:
            resolved.append({'url': link, 'text': DEFAULT_LINK_TEXT})

    logger.debug(f"Resolved {len(resolved)} links for record {record.id}")
    return resolved


def resolve_featured_image(
    record: RawRecord,
    mode: str = 'local',
    image_directory: str = DEFAULT_IMAGE_DIRECTORY
) -> Union[str, bool]:
    """
    Resolve the featured image URL.

    Args:
        record: Source record
        mode: 'local' rewrites to image_directory/<basename>, 'original'
            keeps the absolute URL
        image_directory: Site directory holding feature images

    Returns:
        Image URL, or False when the record has no usable thumbnail

    Raises:
        ValueError: If mode is not one of FEATURED_IMAGE_MODES
    """
    if mode not in FEATURED_IMAGE_MODES:
        raise ValueError(f"Unknown featured image mode: {mode!r}")

    if record.thumbnail_url is None:
        return False

    original_url = record.thumbnail_url
    if not original_url:
        return False

    if mode == 'original':
        return original_url

    basename = original_url.split('/')[-1]
    return f"{image_directory.rstrip('/')}/{basename}"


__all__ = [
    'FEATURED_IMAGE_MODES',
    'MalformedShowtimeError',
    'is_timestamp_like',
    'to_timestamp',
    'to_datetime',
    'format_timestamp',
    'format_showtimes',
    'normalize_showtimes',
    'resolve_showtimes',
    'showtime_year',
    'resolve_rating',
    'resolve_links',
    'resolve_featured_image',
]
