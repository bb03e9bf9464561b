"""Export driver: dispatches fetched records to assemblers and writes the files."""

import logging
from typing import Any, Dict, List, Optional

from config_loader import get_nested
from logger import ProgressTracker
from models import RawRecord, RecordType
from .file_writer import FileWriter
from .frontmatter import render_document
from .record_assembler import RecordAssembler, build_assemblers

DEFAULT_MAX_RECORDS = 1000


class ExportDriver:
    """
    Runs one export pass over the records returned by a query source.

    Records are handled strictly in the order the source returns them. Types
    without an assembler are skipped; a MalformedShowtimeError or an I/O
    error aborts the whole run.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        assemblers: Optional[Dict[RecordType, RecordAssembler]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the export driver.

        Args:
            config: Configuration dictionary with source and export settings
            assemblers: Optional dispatch table overriding the default one
            logger: Logger instance
        """
        self.config = config or {}
        self.logger = logger or logging.getLogger('wp_markdown_export.exporters.export_driver')
        self.assemblers = assemblers if assemblers is not None else build_assemblers(self.config, self.logger)

        self.post_types: List[str] = (
            get_nested(self.config, 'source.post_types')
            or [record_type.value for record_type in RecordType]
        )
        self.max_records = get_nested(self.config, 'source.max_records') or DEFAULT_MAX_RECORDS

        self.stats = {
            'total_records': 0,
            'exported': 0,
            'skipped': 0,
            'by_type': {record_type.value: 0 for record_type in RecordType},
        }

    def run(self, source, writer: FileWriter) -> Dict[str, Any]:
        """
        Fetch records from the source and export every supported one.

        Args:
            source: Query service exposing fetch_records(post_types, limit)
            writer: Filesystem writer

        Returns:
            Statistics dictionary with export results

        Raises:
            MalformedShowtimeError: If a movie's showtimes are corrupt
            OSError: If a directory or file cannot be written
        """
        records = source.fetch_records(self.post_types, self.max_records)
        self.stats['total_records'] = len(records)
        self.logger.info(f"Fetched {len(records)} records")

        with ProgressTracker(total_items=len(records), item_type='records') as tracker:
            for raw in records:
                exported = self.export_record(raw, writer)
                tracker.increment(exported=exported)

        self._log_export_summary()
        return self.stats.copy()

    def export_record(self, raw: RawRecord, writer: FileWriter) -> bool:
        """
        Assemble and write a single record.

        Returns:
            True if a file was written, False if the record type is unsupported
        """
        record_type = raw.record_type
        assembler = self.assemblers.get(record_type) if record_type else None
        if assembler is None:
            self.logger.debug(f"Skipping {raw.title!r} (unsupported type {raw.post_type!r}, ID {raw.id})")
            self.stats['skipped'] += 1
            return False

        self.logger.info(f"Processing {raw.title} ({raw.post_type}, ID {raw.id})")

        record = assembler.assemble(raw)
        path = assembler.output_path(record)

        writer.ensure_directory(path.parent)
        writer.write_file(path, render_document(record))

        self.stats['exported'] += 1
        self.stats['by_type'][record_type.value] += 1
        self.logger.debug(f"Wrote {path}")
        return True

    def _log_export_summary(self) -> None:
        """Log final export statistics."""
        self.logger.info("=" * 60)
        self.logger.info("MARKDOWN EXPORT SUMMARY")
        self.logger.info("=" * 60)
        self.logger.info(f"Records fetched: {self.stats['total_records']}")
        self.logger.info(f"Files written: {self.stats['exported']}")
        for post_type, count in self.stats['by_type'].items():
            self.logger.info(f"  {post_type}: {count}")
        self.logger.info(f"Skipped (unsupported type): {self.stats['skipped']}")
        self.logger.info("=" * 60)


__all__ = ['ExportDriver', 'DEFAULT_MAX_RECORDS']
