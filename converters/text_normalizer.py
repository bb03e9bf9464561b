"""String and metadata normalization helpers shared by the resolvers."""

import re
from typing import Any, Callable, Dict, List, Optional

HOST_PATTERN = re.compile(r'^https?://[^/?#]+/?', re.IGNORECASE)


def strip_host(url: str) -> str:
    """
    Remove a leading scheme://host segment from a URL.

    Args:
        url: Absolute or host-relative URL

    Returns:
        Host-relative path starting with '/', or the input unchanged when it
        carries no http(s) scheme
    """
    if not url:
        return url
    return HOST_PATTERN.sub('/', url, count=1)


def is_blank(value: Any) -> bool:
    """Check whether a metadata value counts as empty in the source datastore."""
    if isinstance(value, str):
        return value in ('', '0')
    return not value


def _value_identity(value: Any) -> Any:
    # Keeps 1, 1.0 and True apart while still comparing containers by value
    return (type(value), value)


def dedup_values(values: List[Any], key: Optional[Callable[[Any], Any]] = None) -> List[Any]:
    """
    De-duplicate a list by value equality, keeping first occurrences.

    Works on unhashable values (mappings, nested lists) by comparing keys
    linearly.

    Args:
        values: Values to de-duplicate
        key: Optional function mapping a value to its comparison key

    Returns:
        New list without duplicates
    """
    key = key or _value_identity
    seen: List[Any] = []
    unique: List[Any] = []

    for value in values:
        identity = key(value)
        if identity in seen:
            continue
        seen.append(identity)
        unique.append(value)

    return unique


def dedup_meta(meta: Dict[str, Any]) -> Dict[str, List[Any]]:
    """
    De-duplicate every value list of a metadata bag.

    Scalars and mappings are wrapped into one-element lists. The input is not
    modified.
    """
    deduped = {}
    for key, values in meta.items():
        if not isinstance(values, list):
            values = [values]
        deduped[key] = dedup_values(values)
    return deduped


__all__ = ['strip_host', 'is_blank', 'dedup_values', 'dedup_meta']
