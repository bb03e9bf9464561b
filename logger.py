"""Structured logging infrastructure with verbosity levels and progress tracking."""

import logging
import logging.handlers
import time
from typing import Any, Dict, Optional

import colorlog

LOGGER_NAME = 'wp_markdown_export'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
SENSITIVE_FIELDS = ('password', 'secret', 'token', 'api_key')
REDACTED = '***REDACTED***'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

def _resolve_level(verbosity: int, level: Optional[str]) -> int:
    if level:
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {list(LOG_LEVELS)}")
        return getattr(logging, level.upper())
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING

def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Set up the exporter's logger.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional path to a rotating log file
        level: Optional explicit log level string (logging.level in config),
            overrides verbosity

    Returns:
        Configured logger instance
    """
    log_level = _resolve_level(verbosity, level)

    # Root stays at WARNING so requests/urllib3 stay quiet
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + LOG_FORMAT,
        datefmt=DATE_FORMAT,
        log_colors=LOG_COLORS,
    ))
    logger.addHandler(console_handler)

    if not log_file:
        logger.info(f"Console logging only. Level: {logging.getLevelName(log_level)}")
        return logger

    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
    except OSError as e:
        logger.warning(f"Failed to set up file logging: {str(e)}")
        return logger

    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)
    logger.info(f"Logging to file: {log_file} (level {logging.getLevelName(log_level)})")

    return logger

class ProgressTracker:
    """Context manager for tracking progress across operations."""

    def __init__(self, total_items: int, item_type: str = "records"):
        """
        Initialize progress tracker.

        Args:
            total_items: Total number of items to process
            item_type: Description of item type (e.g., "records", "movies")
        """
        self.total_items = total_items
        self.item_type = item_type
        self.processed_items = 0
        self.successful_items = 0
        self.skipped_items = 0
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.info(
            f"Starting processing of {self.total_items} {self.item_type}"
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log summary; an aborted run is reported as an error."""
        if self.start_time is None:
            return

        elapsed = time.time() - self.start_time
        log_method = self.logger.error if exc_type is not None else self.logger.info

        log_method(f"=== Progress Summary: {self.item_type.upper()} ===")
        log_method(f"Total: {self.total_items}")
        log_method(f"Processed: {self.processed_items}")
        log_method(f"Exported: {self.successful_items}")
        log_method(f"Skipped: {self.skipped_items}")
        if exc_type is not None:
            log_method(f"Aborted: {exc_type.__name__}")
        log_method(f"Elapsed Time: {self._format_elapsed(elapsed)}")

    def increment(self, exported: bool = True) -> None:
        """
        Increment progress counter.

        Args:
            exported: False when the item was skipped
        """
        self.processed_items += 1

        if exported:
            self.successful_items += 1
        else:
            self.skipped_items += 1

        if self.processed_items % 10 == 0:
            remaining = self.total_items - self.processed_items
            self.logger.info(
                f"Processed {self.processed_items}/{self.total_items} {self.item_type} "
                f"({remaining} remaining)"
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get current progress statistics."""
        if self.start_time is None:
            elapsed = 0.0
        else:
            elapsed = time.time() - self.start_time

        return {
            'total': self.total_items,
            'processed': self.processed_items,
            'exported': self.successful_items,
            'skipped': self.skipped_items,
            'elapsed_time': elapsed,
            'elapsed_time_formatted': self._format_elapsed(elapsed)
        }

    @staticmethod
    def _format_elapsed(seconds: float) -> str:
        """Format elapsed time in human-readable format."""
        if seconds < 60:
            return f"{seconds:.1f}s"

        minutes = int(seconds // 60)
        seconds = int(seconds % 60)

        if minutes < 60:
            return f"{minutes}m {seconds}s"

        hours = minutes // 60
        minutes = minutes % 60

        return f"{hours}h {minutes}m {seconds}s"

def log_section(title: str) -> None:
    """
    Log a decorative section header.

    Args:
        title: Section title to display
    """
    logger = logging.getLogger(LOGGER_NAME)

    separator = "=" * 60
    logger.info("")
    logger.info(separator)
    logger.info(f"  {title.upper()}")
    logger.info(separator)
    logger.info("")

def log_config(config: Dict[str, Any]) -> None:
    """
    Log sanitized configuration for debugging.

    Args:
        config: Configuration dictionary to log
    """
    logger = logging.getLogger(LOGGER_NAME)

    sanitized_config = _sanitize_config(config)

    log_section("Configuration")

    source = sanitized_config.get('source', {})
    mode = source.get('mode', 'json')
    logger.info(f"Source Mode: {mode}")
    if mode == 'api':
        logger.info(f"WordPress Base URL: {source.get('base_url', 'Not Set')}")
        if source.get('username'):
            logger.info(f"Username: {source.get('username')}")
        if source.get('application_password'):
            logger.info(f"Application Password: {REDACTED}")
    else:
        logger.info(f"JSON Dump Path: {source.get('json_path', 'Not Set')}")
    logger.info(f"Post Types: {source.get('post_types', 'All Supported')}")
    logger.info(f"Max Records: {source.get('max_records', 1000)}")

    logger.info("")

    export_settings = sanitized_config.get('export', {})
    logger.info(f"Output Directory: {export_settings.get('output_directory', '.')}")
    logger.info(f"Featured Image Mode: {export_settings.get('featured_image_mode', 'local')}")
    logger.info(f"Image Directory: {export_settings.get('image_directory', '/images/feature')}")
    logger.info(f"Dry Run: {export_settings.get('dry_run', False)}")


def _sanitize_config(config: Any) -> Any:
    """Copy of the configuration with credentials (e.g. the application password) masked."""
    if isinstance(config, dict):
        return {
            key: REDACTED
            if isinstance(value, str) and any(field in str(key).lower() for field in SENSITIVE_FIELDS)
            else _sanitize_config(value)
            for key, value in config.items()
        }
    if isinstance(config, list):
        return [_sanitize_config(item) for item in config]
    return config

__all__ = [
    'setup_logging',
    'ProgressTracker',
    'log_section',
    'log_config'
]
