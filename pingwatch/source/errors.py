"""Errors raised by ping data sources."""

from enum import Enum


class FetchErrorClass(str, Enum):
    """Classification of data source failures.

    - NETWORK_TIMEOUT: Request timed out
    - CONNECTION_ERROR: Could not establish connection
    - HTTP_4XX: Client error response
    - HTTP_5XX: Server error response
    - INVALID_PAYLOAD: Body was not the expected JSON shape
    - UNKNOWN: Unclassified error
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_4XX = "HTTP_4XX"
    HTTP_5XX = "HTTP_5XX"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    UNKNOWN = "UNKNOWN"


class SourceError(Exception):
    """Base class for data source failures."""

    def __init__(
        self,
        message: str,
        error_class: FetchErrorClass = FetchErrorClass.UNKNOWN,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable message.
            error_class: Failure classification.
            url: Requested URL, if any.
            status_code: HTTP status code, if a response arrived.
        """
        self.error_class = error_class
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class SourceFetchError(SourceError):
    """Raised when the transport call fails or returns a non-2xx status."""


class PayloadError(SourceError):
    """Raised when a response body cannot be read as the expected payload."""

    def __init__(self, message: str, url: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable message.
            url: Requested URL, if any.
        """
        super().__init__(message, FetchErrorClass.INVALID_PAYLOAD, url=url)
