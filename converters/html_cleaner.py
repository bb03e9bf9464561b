"""HTML cleaner for removing block-editor markup without losing content."""

import logging
import re

logger = logging.getLogger('wp_markdown_export.converters.htmlcleaner')


class BlockMarkupCleaner:
    """Removes Gutenberg block annotations and embed wrappers from post HTML.

    This is a textual pass: each pattern matches up to the first '>' and no
    nesting is assumed beyond the literal patterns.
    """

    BLOCK_COMMENT_PATTERN = re.compile(r'<!-- /?wp:[^>]+>')
    EMBED_OPEN_PATTERN = re.compile(r'<figure[^>]+><div[^>]+embed[^>]+>')
    EMBED_CLOSE = '</div></figure>'

    def __init__(self, logger: logging.Logger = None):
        """Initialize cleaner with optional logger."""
        self.logger = logger or logging.getLogger('wp_markdown_export.converters.htmlcleaner')

    def clean(self, html: str) -> str:
        """
        Strip structural block markup from HTML.

        Args:
            html: Post content as stored by the block editor

        Returns:
            HTML with block comments and embed wrappers removed
        """
        if not html:
            return ''

        html, comments = self.BLOCK_COMMENT_PATTERN.subn('', html)
        # Embeds are rendered by the site generator from the bare URL
        html, embeds = self.EMBED_OPEN_PATTERN.subn('', html)
        html = html.replace(self.EMBED_CLOSE, '')

        if comments or embeds:
            self.logger.debug(f"Removed {comments} block markers and {embeds} embed wrappers")

        return html
