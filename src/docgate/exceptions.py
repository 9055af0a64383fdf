"""Core exception hierarchy for docgate.

All exceptions raised by the library inherit from DocGateError so callers
can handle every docgate failure with a single except clause.
"""


class DocGateError(Exception):
    """Base exception for all docgate errors."""

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            cause: Optional underlying exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class InvalidConfigurationError(DocGateError):
    """Raised when a gate or client is built from invalid settings.

    This covers non-positive capacities or windows, unknown time units,
    malformed YAML profiles and failed model validation. It is not
    recoverable without changing the configuration.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Human-readable error description.
            field_path: Optional dotted path to the offending field
                (e.g., "gate.capacity").
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.field_path = field_path

    def __str__(self) -> str:
        """Return string representation including field path."""
        base_msg = super().__str__()
        if self.field_path:
            return f"{base_msg} (field: {self.field_path})"
        return base_msg


class AdmissionCancelledError(DocGateError):
    """Raised when a caller blocked in acquire() is cancelled.

    No token is consumed; the caller may retry or abandon the operation.
    """

    def __init__(self, message: str = "Admission cancelled while waiting"):
        super().__init__(message)


class SubmissionError(DocGateError):
    """Raised when the document API rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the submission error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status returned by the API, if any.
            body: Raw response body, if any.
            cause: Optional underlying transport exception.
        """
        super().__init__(message, cause)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        """Return string representation including the HTTP status."""
        base_msg = super().__str__()
        if self.status_code is not None:
            return f"{base_msg} (status: {self.status_code})"
        return base_msg
