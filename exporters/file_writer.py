"""Filesystem writer for exported Markdown files."""

import logging
from pathlib import Path
from typing import Optional, Union


class FileWriter:
    """Creates output directories and writes whole files under an output root."""

    def __init__(
        self,
        output_directory: Union[str, Path] = '.',
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the writer.

        Args:
            output_directory: Root that relative paths are resolved against
            dry_run: Log the files that would be written instead of writing
            logger: Logger instance
        """
        self.output_directory = Path(output_directory)
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger('wp_markdown_export.exporters.file_writer')
        self.files_written = 0

    def resolve(self, path: Union[str, Path]) -> Path:
        return self.output_directory / path

    def ensure_directory(self, path: Union[str, Path]) -> Path:
        """Create a directory and its parents; no error if it already exists."""
        directory = self.resolve(path)
        if self.dry_run:
            self.logger.debug(f"[dry-run] Would create directory {directory}")
            return directory

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"OS error creating directory {directory}: {e}")
            raise
        return directory

    def write_file(self, path: Union[str, Path], content: str) -> Path:
        """
        Write a file in one go, replacing any existing content.

        Raises:
            OSError: If the file cannot be written
        """
        target = self.resolve(path)
        if self.dry_run:
            self.logger.info(f"[dry-run] Would write {len(content.encode('utf-8'))} bytes to {target}")
            return target

        try:
            target.write_text(content, encoding='utf-8')
        except OSError as e:
            self.logger.error(f"IO error writing to {target}: {e}")
            raise

        self.files_written += 1
        self.logger.debug(f"Successfully wrote {len(content)} characters to {target}")
        return target
