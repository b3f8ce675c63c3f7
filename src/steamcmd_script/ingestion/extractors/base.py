"""
Base extractor with HTTP client management and error handling.

Provides a foundation for all API extractors: a shared async client,
status code handling, JSON decoding, and structured logging. Requests
are made exactly once; a failed request is reported, never retried.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, Field

from steamcmd_script.config import get_settings
from steamcmd_script.logger import get_logger

# Type variable for response models
T = TypeVar("T", bound=BaseModel)

DEFAULT_HEADERS = {
    "User-Agent": "SteamCMDScript/1.0",
    "Accept": "application/json",
}


class ExtractionError(Exception):
    """Base exception for extraction errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class RateLimitError(ExtractionError):
    """Raised when rate limit is exceeded."""

    pass


class APIError(ExtractionError):
    """Raised when API returns an error response."""

    pass


class ValidationError(ExtractionError):
    """Raised when a response is not JSON or does not match its contract."""

    pass


class ExtractionResult(BaseModel, Generic[T]):
    """
    Wrapper for extraction results with metadata.

    Provides consistent structure for all extraction outputs,
    including timing, source tracking, and error information.
    """

    success: bool
    data: T | None = None
    error_message: str | None = None
    extracted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str
    endpoint: str
    duration_ms: float | None = None


class BaseExtractor(ABC, Generic[T]):
    """
    Abstract base class for all data extractors.

    Provides common functionality including:
    - HTTP client management
    - Error status translation
    - Structured logging
    - Result wrapping with metadata

    Subclasses must implement:
    - source_name: Identifier for the data source
    - extract(): Main extraction logic
    - _parse_response(): Response parsing and validation
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            timeout: HTTP request timeout in seconds
            client: Shared HTTP client (the extractor creates its own if None)
        """
        settings = get_settings()
        self._timeout = timeout or settings.steam.timeout_seconds
        self._logger = get_logger(
            self.__class__.__name__,
            component="extractor",
            source=self.source_name,
        )
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return identifier for this data source."""
        ...

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers=DEFAULT_HEADERS,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseExtractor[T]":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional arguments passed to httpx

        Returns:
            httpx.Response: Successful response

        Raises:
            RateLimitError: If the API answers 429
            APIError: If API returns error response
            ExtractionError: For transport failures
        """
        self._logger.debug("Making request", method=method, url=url)

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise ExtractionError(
                f"Request failed: {e.__class__.__name__}: {e}",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e

        # Handle rate limiting
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "60")
            raise RateLimitError(
                f"Rate limit exceeded. Retry after {retry_after}s",
                source=self.source_name,
                endpoint=url,
                status_code=429,
            )

        # Handle other errors
        if response.status_code >= 400:
            raise APIError(
                f"HTTP error {response.status_code}",
                source=self.source_name,
                endpoint=url,
                status_code=response.status_code,
            )

        return response

    def _decode_json(self, response: httpx.Response) -> dict[str, Any]:
        """
        Decode a response body as a JSON object.

        Raises:
            ValidationError: If the body is not a JSON object
        """
        try:
            raw_data = response.json()
        except ValueError as e:
            raise ValidationError(
                f"Malformed JSON response: {e}",
                source=self.source_name,
                endpoint=str(response.request.url),
                status_code=response.status_code,
                original_error=e,
            ) from e

        if not isinstance(raw_data, dict):
            raise ValidationError(
                f"Expected a JSON object, got {type(raw_data).__name__}",
                source=self.source_name,
                endpoint=str(response.request.url),
                status_code=response.status_code,
            )
        return raw_data

    @abstractmethod
    async def extract(self, **kwargs: Any) -> ExtractionResult[T]:
        """
        Execute extraction logic.

        Must be implemented by subclasses to define specific
        extraction behavior.

        Returns:
            ExtractionResult[T]: Wrapped extraction result with metadata
        """
        ...

    @abstractmethod
    def _parse_response(self, raw_data: dict[str, Any]) -> T:
        """
        Parse and validate raw API response.

        Must be implemented by subclasses to convert raw JSON
        into validated Pydantic models.

        Args:
            raw_data: Raw JSON response from API

        Returns:
            T: Validated Pydantic model

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        ...
