"""Markdown export package for the WordPress to Markdown migration.

Package Structure:
- record_assembler: one assembler per record type (article, page, movie)
  building the canonical record and its output path
- frontmatter: YAML front-matter serialization with '---' delimiters
- file_writer: directory creation and whole-file writes (with dry-run)
- export_driver: runs an export pass over a query source

Output layout (relative to export.output_directory):
- article/<YYYY>/<MM>/<DD>/<slug>.md
- page/<slug>.md
- movie/<year>/<slug>.md
"""

from .export_driver import ExportDriver
from .file_writer import FileWriter
from .frontmatter import render_document, serialize_frontmatter
from .record_assembler import (
    ArticleAssembler,
    MovieAssembler,
    PageAssembler,
    RecordAssembler,
    build_assemblers,
)

__all__ = [
    'ExportDriver',
    'FileWriter',
    'render_document',
    'serialize_frontmatter',
    'RecordAssembler',
    'ArticleAssembler',
    'PageAssembler',
    'MovieAssembler',
    'build_assemblers',
]
