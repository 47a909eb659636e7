"""Custom exceptions for the search provider and reference store clients."""

from typing import Optional


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Transport-level subclasses describe what went wrong on the wire; the
    domain subclasses (ProviderError, StoreReadError, StoreWriteError) tell
    the pipeline whether to abort the run or carry on.
    """

    pass


class AdapterHTTPError(AdapterError):
    """HTTP request failed with a non-success status or a connection error."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 for connection failures)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response body could not be parsed or had an unexpected shape."""

    pass


class AdapterConfigurationError(AdapterError):
    """Invalid adapter configuration (timeout out of range, empty key ...)."""

    pass


class ProviderError(AdapterError):
    """The job search provider failed.

    Aborts the run before any update is applied.
    """

    def __init__(self, message: str, query: Optional[str] = None, status_code: Optional[int] = None) -> None:
        """Initialize provider error.

        Args:
            message: Human-readable error message
            query: Search query that failed
            status_code: HTTP status code, if the provider answered
        """
        super().__init__(message)
        self.query = query
        self.status_code = status_code


class StoreError(AdapterError):
    """Base class for reference store failures."""

    pass


class StoreReadError(StoreError):
    """Loading the reference company snapshot failed. Aborts the run."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.offset = offset


class StoreWriteError(StoreError):
    """Applying an update for one company failed.

    Recorded in the run report; other companies are still processed.
    """

    def __init__(self, message: str, company_name: str, operation: str) -> None:
        """Initialize write error.

        Args:
            message: Human-readable error message
            company_name: Canonical name of the company being updated
            operation: Update that failed ("set_active_role" or "set_tracking_status")
        """
        super().__init__(message)
        self.company_name = company_name
        self.operation = operation
