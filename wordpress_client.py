"""WordPress REST API client with retry logic and error handling."""

import json
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger('wp_markdown_export.client')

MAX_PER_PAGE = 100  # WordPress REST upper bound for per_page


class WordPressClient:
    """WordPress REST API client with optional application-password auth and retries."""

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        application_password: Optional[str] = None,
        verify_ssl: bool = True,
        timeout: int = 30,
        max_retries: int = 3,
        retry_backoff_factor: float = 2.0
    ):
        """
        Initialize WordPress client.

        Args:
            base_url: Site URL (e.g., "https://example.org")
            username: Username for application-password auth
            application_password: Application password for the user
            verify_ssl: Whether to verify SSL certificates
            timeout: HTTP request timeout in seconds
            max_retries: Maximum retry attempts for transient errors
            retry_backoff_factor: Exponential backoff factor
        """
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers['Accept'] = 'application/json'

        if username:
            if not application_password:
                raise ValueError("Authentication requires an application password")
            self.session.auth = (username, application_password)
            logger.info(f"Initialized WordPress client with application password for {base_url}")
        else:
            logger.info(f"Initialized anonymous WordPress client for {base_url}")

        self.session.verify = verify_ssl
        if not verify_ssl:
            logger.warning("SSL verification disabled - this is insecure!")

        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=retry_backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        logger.debug(f"Client configured with timeout={timeout}s, max_retries={max_retries}, "
                     f"backoff_factor={retry_backoff_factor}")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'WordPressClient':
        """Build a client from the source and advanced configuration sections."""
        source = config.get('source', {})
        advanced = config.get('advanced', {})
        return cls(
            base_url=source['base_url'],
            username=source.get('username'),
            application_password=source.get('application_password'),
            verify_ssl=source.get('verify_ssl', True),
            timeout=int(advanced.get('request_timeout', 30)),
            max_retries=int(advanced.get('max_retries', 3)),
            retry_backoff_factor=float(advanced.get('retry_backoff_factor', 2.0)),
        )

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make HTTP request to the REST API.

        Args:
            method: HTTP method
            endpoint: Path below the site URL (e.g., "wp-json/wp/v2/posts")
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            requests.exceptions.RequestException: For request and HTTP errors
        """
        url = urljoin(self.base_url, endpoint.lstrip('/'))

        start_time = time.time()
        logger.debug(f"API Request: {method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            logger.debug(f"API Response: {response.status_code} {url} ({time.time() - start_time:.3f}s)")
            response.raise_for_status()
            return response

        except requests.exceptions.Timeout:
            logger.error(f"Request timeout after {self.timeout}s: {method} {url}")
            raise

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"HTTP Error {status_code}: {method} {url}")

            if e.response is not None:
                try:
                    logger.error(f"Error details: {json.dumps(e.response.json(), indent=2)}")
                except ValueError:
                    logger.error(f"Error response: {e.response.text[:500]}")
            raise

        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {method} {url} - {str(e)}")
            raise

    def get_items(self, rest_base: str, limit: int) -> List[Dict[str, Any]]:
        """
        Fetch up to limit items of one REST collection, newest first.

        Args:
            rest_base: Collection name (e.g., "posts", "pages")
            limit: Maximum number of items

        Returns:
            List of item dictionaries with embedded featured media
        """
        items: List[Dict[str, Any]] = []
        page = 1
        # Page offsets depend on per_page, so it stays fixed for the whole walk
        per_page = min(MAX_PER_PAGE, limit)

        while len(items) < limit:
            params = {
                'per_page': per_page,
                'page': page,
                'orderby': 'date',
                'order': 'desc',
                '_embed': 'wp:featuredmedia',
            }
            response = self._make_request('GET', f'wp-json/wp/v2/{rest_base}', params=params)
            batch = response.json()
            if not batch:
                break

            items.extend(batch)

            total_pages = int(response.headers.get('X-WP-TotalPages', page))
            logger.debug(f"Fetched page {page}/{total_pages} of {rest_base} ({len(batch)} items)")
            if page >= total_pages:
                break
            page += 1

        return items[:limit]


__all__ = ['WordPressClient']
