"""Fetchers package for retrieving WordPress content via REST API or a JSON dump."""

from .base_fetcher import BaseFetcher, FetcherError
from .api_fetcher import ApiFetcher
from .json_fetcher import JsonFetcher


class FetcherFactory:
    """Factory for creating fetcher instances based on configuration."""

    @staticmethod
    def create_fetcher(config: dict, logger=None):
        """Create appropriate fetcher based on config mode.

        Args:
            config: Configuration dictionary
            logger: Logger instance

        Returns:
            BaseFetcher instance (ApiFetcher or JsonFetcher)

        Raises:
            ValueError: If mode is invalid
        """
        mode = config.get('source', {}).get('mode', 'json')

        if mode == 'api':
            return ApiFetcher(config, logger)
        elif mode == 'json':
            return JsonFetcher(config, logger)
        else:
            raise ValueError(f"Invalid source mode: {mode}. Must be 'api' or 'json'.")


__all__ = [
    'BaseFetcher',
    'FetcherError',
    'ApiFetcher',
    'JsonFetcher',
    'FetcherFactory'
]
