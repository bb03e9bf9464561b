"""Markdown converter for post bodies."""

import logging
import re

from markdownify import ATX, MarkdownConverter as MarkdownifyConverter

from .html_cleaner import BlockMarkupCleaner

logger = logging.getLogger('wp_markdown_export.converters.markdownconverter')


class MarkdownConverter(MarkdownifyConverter):
    """
    Converts cleaned post HTML to Markdown.

    Extends markdownify.MarkdownConverter with the options the static site
    expects (ATX headings, '-' bullets, no wrapping) and runs the block markup
    cleaner before conversion.
    """

    def __init__(self, logger: logging.Logger = None, **kwargs):
        """Initialize markdown converter; kwargs override the markdownify options."""
        markdownify_options = {
            'heading_style': ATX,  # Use # for headings
            'bullets': '-',
            'escape_asterisks': False,
            'escape_underscores': False,
            'escape_misc': False,
            'wrap': False,
        }
        markdownify_options.update(kwargs)

        super().__init__(**markdownify_options)

        self.logger = logger or logging.getLogger('wp_markdown_export.converters.markdownconverter')
        self.cleaner = BlockMarkupCleaner(self.logger)

    def to_markdown(self, html: str) -> str:
        """
        Convert post HTML to Markdown.

        Args:
            html: Raw post content

        Returns:
            Markdown text without leading or trailing blank lines
        """
        cleaned = self.cleaner.clean(html)
        if not cleaned.strip():
            return ''

        markdown = self.convert(cleaned)
        return self._post_process_markdown(markdown)

    def _post_process_markdown(self, markdown: str) -> str:
        """Collapse runs of blank lines left behind by removed blocks."""
        markdown = re.sub(r'\n{3,}', '\n\n', markdown)
        return markdown.strip()


def convert_body(html: str) -> str:
    """Clean block markup from HTML and convert it to Markdown."""
    return MarkdownConverter().to_markdown(html)
