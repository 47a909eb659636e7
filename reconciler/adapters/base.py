"""Base HTTP client shared by the search provider and reference store.

Provides session setup, timeout handling and translation of transport
failures into adapter exceptions.
"""

import logging
from typing import Any, Dict, Optional

import requests

from reconciler.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")


class BaseClient:
    """Base class for HTTP clients.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "CompanyOpeningReconciler/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client with configuration.

        Args:
            timeout: HTTP request timeout in seconds (range 5-300)
            user_agent: User-Agent header for requests
            session: Optional pre-built session (tests inject a mock)

        Raises:
            AdapterConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
        expect_json: bool = True,
    ) -> Any:
        """Make HTTP request with error handling.

        Args:
            url: URL to request
            method: HTTP method (default "GET")
            headers: Additional headers (merged over session defaults)
            params: Query parameters
            json_data: JSON body
            expect_json: Parse the body as JSON; when False, or when the
                body is empty (e.g. 204 No Content), None is returned

        Returns:
            Parsed JSON response, or None

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On invalid JSON
        """
        try:
            logger.debug(
                f"HTTP {method} request to {url}",
                extra={
                    "event": "adapter.request.started",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "adapter.request.timeout",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "adapter.request.error",
                    "method": method,
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

        if response.status_code >= 400:
            logger.log(
                logging.WARNING if response.status_code >= 500 else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "adapter.request.http_error",
                    "method": method,
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {self._error_detail(response)}",
                status_code=response.status_code,
                url=url,
            )

        if not expect_json or not response.content:
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={
                    "event": "adapter.request.invalid_json",
                    "url": url,
                },
            )
            raise AdapterResponseError(
                f"Failed to parse JSON response from {url}: {e}"
            ) from e

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "adapter.request.succeeded",
                "status_code": response.status_code,
                "url": url,
            },
        )
        return data

    @staticmethod
    def _error_detail(response: requests.Response, limit: int = 200) -> str:
        """Short description of an error response for messages."""
        text = (response.text or "").strip()
        if not text:
            return response.reason or "error"
        return text if len(text) <= limit else text[:limit] + "..."
