from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class FetchError(Exception):
    """Custom exception for collaborator fetch errors."""

    pass


class AuthenticationError(FetchError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RateLimitError(FetchError):
    """Exception raised for rate limit errors (429)."""

    pass


class RetryableStatusError(FetchError):
    """Server answered with a status worth retrying (5xx, 408)."""

    pass


class BaseFetcher:
    """Base class for the HTTP collaborators feeding the resolver."""

    source: str = "unknown"

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30.0):
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @retry(
        stop=stop_after_attempt(4),  # Max 3 retries (4 total attempts)
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (httpx.RequestError, RetryableStatusError, RateLimitError)
        ),
        reraise=True,  # Reraise the exception after max attempts
    )
    def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an HTTP request with retry logic."""
        logger.bind(params=params).debug(f"Making request: {method} {url}")
        try:
            response = self.client.request(
                method, url, headers=headers, params=params, **kwargs
            )
        except httpx.RequestError as e:
            # Network errors, timeouts etc.
            logger.warning(f"Request error for {self.source}, retrying: {e}")
            raise

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) for {self.source} at {url}. Check credentials."
            )
            # Don't retry auth errors
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for {self.source}"
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(
                f"Rate limit hit (429) for {self.source} at {url}. Retry-After: {retry_after}"
            )
            raise RateLimitError(f"Rate limited by {self.source}")

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(
                f"Retrying request for {self.source} due to status {response.status_code}"
            )
            raise RetryableStatusError(
                f"HTTP {response.status_code} from {self.source} at {url}"
            )

        try:
            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error during request for {self.source}: {e.response.status_code} - {e}"
            )
            raise FetchError(f"HTTP error: {e.response.status_code}") from e

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    def _get_json(self, url: str, **kwargs) -> Any:
        response = self._make_request("GET", url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            logger.debug(f"Raw response content: {response.text[:500]}")
            raise FetchError(f"Invalid JSON from {self.source} at {url}") from e

    def close(self) -> None:
        """Closes the underlying HTTP client."""
        self.client.close()
        logger.info(f"Closed HTTP client for {self.source}")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
