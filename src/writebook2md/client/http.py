"""HTTP client for Writebook sites."""

import logging
from typing import Any, NamedTuple

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models import WritebookConfig
from ..utils.exceptions import NetworkError, PageNotFoundError


logger = logging.getLogger(__name__)


class FetchResult(NamedTuple):
    """Status code and raw body of a successful GET."""

    status_code: int
    content: bytes


class WritebookClient:
    """Blocking HTTP client for book index, chapter pages and images.

    Connection errors and timeouts are retried with exponential backoff;
    HTTP error statuses are not retried and surface as ``NetworkError``
    (``PageNotFoundError`` for 404).

    Example:
        with WritebookClient(config) as client:
            status, body = client.fetch("https://books.example.com/1/my-book")
    """

    def __init__(self, config: WritebookConfig, transport: httpx.BaseTransport | None = None):
        """Initialize the HTTP client.

        Args:
            config: Application configuration
            transport: Optional httpx transport (used by tests)
        """
        self._config = config
        self._client = httpx.Client(
            timeout=config.timeout,
            follow_redirects=True,
            transport=transport,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "text/html,application/xhtml+xml,image/*;q=0.9,*/*;q=0.8",
            },
        )

    def __enter__(self) -> "WritebookClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        self._client.close()

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._config.max_retries + 1),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
            reraise=True,
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional arguments for httpx request

        Returns:
            HTTP response

        Raises:
            PageNotFoundError: On 404 Not Found
            NetworkError: On any other HTTP, network or transport error
        """
        try:
            response = self._retrying()(self._client.request, method, url, **kwargs)

            if response.status_code == 404:
                raise PageNotFoundError(f"Resource not found: {url}")

            response.raise_for_status()

            return response

        except PageNotFoundError:
            raise
        except httpx.HTTPStatusError as e:
            raise NetworkError(f"HTTP error {e.response.status_code} for {url}") from e
        except (httpx.NetworkError, httpx.TimeoutException) as e:
            raise NetworkError(
                f"Giving up on {url} after {self._config.max_retries + 1} attempt(s): {e}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

    def fetch(self, url: str) -> FetchResult:
        """GET a URL.

        Args:
            url: Absolute URL

        Returns:
            ``(status_code, body_bytes)`` of the successful response

        Raises:
            PageNotFoundError: If the server answers 404
            NetworkError: On network/HTTP errors
        """
        logger.debug(f"GET {url}")
        response = self._request("GET", url)
        return FetchResult(response.status_code, response.content)

    def download_content(self, url: str) -> bytes:
        """Download binary content (images).

        Args:
            url: Content URL

        Returns:
            Raw content bytes

        Raises:
            NetworkError: On download errors
        """
        return self.fetch(url).content
