"""YAML front-matter serialization for exported records."""

from typing import Any, Dict

import yaml

from models import CanonicalRecord

DOCUMENT_END = '\n...\n'
FRONTMATTER_DELIMITER = '\n---\n'


class FrontMatterDumper(yaml.SafeDumper):
    """Safe dumper that never emits anchors or aliases for repeated values."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def serialize_frontmatter(data: Dict[str, Any]) -> str:
    """
    Serialize a front-matter mapping bounded by '---' lines.

    Keys keep their insertion order; lists and mappings are written in block
    style.

    Args:
        data: Ordered front-matter mapping

    Returns:
        YAML text starting and ending with a '---' line
    """
    yaml_str = yaml.dump(
        data,
        Dumper=FrontMatterDumper,
        default_flow_style=False,  # Forces block style for lists/arrays
        allow_unicode=True,
        sort_keys=False,
        width=1000,  # Prevent line wrapping
        explicit_start=True,
        explicit_end=True,
    )
    # Converts ending '...' to '---'.
    return yaml_str.replace(DOCUMENT_END, FRONTMATTER_DELIMITER)


def render_document(record: CanonicalRecord) -> str:
    """Full file content: front matter, one blank line, then the body."""
    return f"{serialize_frontmatter(record.to_frontmatter())}\n{record.body}"


__all__ = ['FrontMatterDumper', 'serialize_frontmatter', 'render_document']
