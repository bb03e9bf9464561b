#!/usr/bin/env python3
"""
WordPress to Markdown Export Tool - Main CLI Entry Point

Exports articles, pages and movies from a WordPress site into Markdown files
with YAML front matter for a static site generator. Every run rewrites the
files of the records it fetches; files of deleted records are left in place.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# Add project root to Python path for script execution
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from config_loader import ConfigLoader, get_nested
from converters import MalformedShowtimeError
from exporters import ExportDriver, FileWriter
from fetchers import FetcherFactory, FetcherError
from logger import setup_logging, log_section, log_config

__version__ = "1.0.0"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Export WordPress content to Markdown files with YAML front matter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export using ./config.yaml
  wp-markdown-export

  # Use another configuration file
  wp-markdown-export --config site.yaml

  # Preview without writing files
  wp-markdown-export --dry-run -v
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration YAML file (default: config.yaml)'
    )

    parser.add_argument(
        '--dry-run',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Show which files would be written without writing them'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    return parser


def run_export(config: dict, logger: logging.Logger) -> int:
    """Execute one export pass."""
    dry_run = get_nested(config, 'export.dry_run', False)
    output_directory = get_nested(config, 'export.output_directory', '.')

    logger.info(f"Output directory: {output_directory}, Dry-run: {dry_run}")

    try:
        source = FetcherFactory.create_fetcher(config, logger)
        writer = FileWriter(output_directory, dry_run=dry_run, logger=logger)
        driver = ExportDriver(config, logger=logger)

        stats = driver.run(source, writer)

    except MalformedShowtimeError as e:
        logger.error(f"Export aborted: {e}")
        print(f"Whoops! Malformed showtimes for record {e.record_id}:", file=sys.stderr)
        print(repr(e.showtimes), file=sys.stderr)
        return 1
    except FetcherError as e:
        logger.error(f"Could not read source records: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Export interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Export failed: {str(e)}", exc_info=True)
        return 1

    logger.info(f"Export completed: {stats['exported']} files written, {stats['skipped']} records skipped")
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        logger = setup_logging(verbosity=args.verbose)

        log_section("WordPress to Markdown Export")
        logger.info(f"Version: {__version__}")

        logger.info(f"Loading configuration from {args.config}")
        config = ConfigLoader.load(args.config)
        config = ConfigLoader.merge_with_args(config, args)
        ConfigLoader.validate(config)

        # Reconfigure logging with config file settings
        logger = setup_logging(
            verbosity=args.verbose,
            log_file=get_nested(config, 'logging.file'),
            level=get_nested(config, 'logging.level')
        )

        log_config(config)

        return run_export(config, logger)

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nExport interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
