"""
Error taxonomy for the communication log service.

Every failure the pipeline can report is a CommlogError subclass carrying
a human-readable message, optional diagnostic details, and the HTTP status
the API layer renders it with.
"""

from typing import Any, Dict, Optional


class CommlogError(Exception):
    """Base class for all service errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Error body as returned to API clients."""
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidDateFormat(CommlogError):
    """A date parameter is not a valid YYYY-MM-DD calendar date."""
    status_code = 400

    def __init__(self, value: str, parameter: str = "date"):
        super().__init__(
            "Invalid date format. Use YYYY-MM-DD",
            details=f"{parameter}={value!r}",
        )
        self.value = value
        self.parameter = parameter


class MissingRequiredParameter(CommlogError):
    status_code = 400


class MissingSearchQuery(CommlogError):
    status_code = 400

    def __init__(self, message: str = "Parameter q (search query) is required"):
        super().__init__(message)


class MethodNotAllowed(CommlogError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class UpstreamProviderError(CommlogError):
    """The calendar provider call failed; details hold the upstream message."""
    status_code = 500


class InternalError(CommlogError):
    status_code = 500

    def __init__(self, message: str = "Internal server error", details: Optional[str] = None):
        super().__init__(message, details)
