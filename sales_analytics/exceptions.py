"""
Exception hierarchy for sales analytics.

Exception Hierarchy:
    SalesAnalyticsError (base)
    ├── FetchFailure             - Data-fetch collaborator failed (user-visible)
    ├── InvalidSelection         - Report selection is incomplete or invalid
    ├── SyncError                - A platform sync step failed
    └── PlatformError            - Ad / e-commerce platform problems
        ├── PlatformConnectionError  - Network/timeout issues
        ├── PlatformAPIError         - Platform returned an error response
        └── PlatformDataError        - Payload has an unexpected structure

An empty report is not an error: zero-length output is a valid result.
"""


class SalesAnalyticsError(Exception):
    """Base exception for all sales analytics errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class FetchFailure(SalesAnalyticsError):
    """
    Reading sales or reference data failed.

    The report run is aborted and no partial chart is produced.
    """


class InvalidSelection(SalesAnalyticsError):
    """
    The report selection cannot be resolved to a date window yet.

    Callers skip aggregation and wait for a complete selection.
    """


class SyncError(SalesAnalyticsError):
    """A sync step against an external platform or the database failed."""


class PlatformError(SalesAnalyticsError):
    """Base class for ad and e-commerce platform errors."""

    def __init__(self, message: str, details: str = None, platform: str = None):
        super().__init__(message, details)
        self.platform = platform


class PlatformConnectionError(PlatformError):
    """Network-related errors (timeout, connection refused, etc.)."""


class PlatformAPIError(PlatformError):
    """
    Platform returned an error response.

    Check status_code for specifics.
    """

    def __init__(
        self,
        message: str,
        details: str = None,
        platform: str = None,
        status_code: int = None,
    ):
        super().__init__(message, details, platform)
        self.status_code = status_code


class PlatformDataError(PlatformError):
    """
    Platform payload has an unexpected structure.

    Raised while validating payloads at the boundary, before any of it
    reaches the database or the aggregation stages.
    """

    def __init__(self, message: str, details: str = None, platform: str = None,
                 expected: str = None, got: str = None):
        super().__init__(message, details, platform)
        self.expected = expected
        self.got = got
