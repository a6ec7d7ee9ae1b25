"""Custom exception classes."""

from fastapi import status


class SafePathException(Exception):
    """Base exception for SafePath application."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(SafePathException):
    """Validation error."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class InvalidIncidentError(ValidationError):
    """Incident record cannot be scored (bad period or coordinates)."""

    def __init__(self, message: str = "Invalid incident record"):
        super().__init__(message)


class InvalidCoordinateError(ValidationError):
    """Coordinate is missing or not a finite number."""

    def __init__(self, message: str = "Invalid coordinate"):
        super().__init__(message)


class SnapshotLoadError(SafePathException):
    """Heatmap snapshot file missing or unreadable."""

    def __init__(self, message: str = "Heatmap snapshot unavailable"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


class ExternalServiceError(SafePathException):
    """External service (geocoder) error."""

    def __init__(self, message: str = "External service unavailable"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)
