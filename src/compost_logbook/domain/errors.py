"""Domain errors."""


class LogValidationError(ValueError):
    """Raised when a submitted log entry is rejected."""


class ReportValidationError(ValueError):
    """Raised when a report request is rejected before it is stored."""


class ReportNotFoundError(LookupError):
    """Raised when a report id does not exist."""
