"""Error taxonomy for session operations."""

from enum import StrEnum


class ErrorReason(StrEnum):
    """Stable codes stored on a failed session."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_CONTENT = "no_content"
    INVALID_INPUT = "invalid_input"


class ImageStudioError(Exception):
    """Base exception for the application."""


class TransformError(ImageStudioError):
    """Failure of a single request against the generative service."""

    reason: ErrorReason


class ServiceUnavailable(TransformError):
    """Transport failure or non-success response from the service."""

    reason = ErrorReason.SERVICE_UNAVAILABLE


class NoContent(TransformError):
    """Successful response that lacks the expected payload."""

    reason = ErrorReason.NO_CONTENT


class InvalidInput(TransformError):
    """Request rejected before anything was sent."""

    reason = ErrorReason.INVALID_INPUT


class SessionBusy(ImageStudioError):
    """Action not allowed while an operation is in flight."""
