"""
Error definitions for the image-edit client and sessions.

Every error carries a stable numeric code and key so callers can map
failures to user-facing messages without parsing text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorSpec:
    """Error specification containing code and key."""

    code: int
    key: str


class ErrorRegistry:
    """Registry of all error specifications."""

    # 1xxx Input validation
    ERROR_PROMPT_EMPTY = ErrorSpec(1001, "ERROR_PROMPT_EMPTY")
    ERROR_IMAGE_MISSING = ErrorSpec(1002, "ERROR_IMAGE_MISSING")
    ERROR_IMAGE_FORMAT_UNSUPPORTED = ErrorSpec(1003, "ERROR_IMAGE_FORMAT_UNSUPPORTED")
    ERROR_IMAGE_SIZE_EXCEEDED = ErrorSpec(1004, "ERROR_IMAGE_SIZE_EXCEEDED")

    # 2xxx Edit service
    ERROR_SERVICE_FAILED = ErrorSpec(2001, "ERROR_SERVICE_FAILED")
    ERROR_SERVICE_NO_IMAGE = ErrorSpec(2002, "ERROR_SERVICE_NO_IMAGE")
    ERROR_SERVICE_UNREACHABLE = ErrorSpec(2003, "ERROR_SERVICE_UNREACHABLE")


class BaseEditorError(Exception):
    """Base exception class for all photoedit errors."""

    def __init__(
        self, spec: ErrorSpec, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.spec = spec
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "code": self.spec.code,
            "key": self.spec.key,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(BaseEditorError):
    """Raised for bad input, before any request is sent."""


class EmptyPromptError(ValidationError):
    def __init__(self, message: str = "Prompt must not be empty", details=None):
        super().__init__(ErrorRegistry.ERROR_PROMPT_EMPTY, message, details)


class MissingImageError(ValidationError):
    def __init__(self, message: str = "An input image is required", details=None):
        super().__init__(ErrorRegistry.ERROR_IMAGE_MISSING, message, details)


class UnsupportedImageError(ValidationError):
    """Raised when a file or data URI is not an image."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorRegistry.ERROR_IMAGE_FORMAT_UNSUPPORTED, message, details)


class ImageTooLargeError(ValidationError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorRegistry.ERROR_IMAGE_SIZE_EXCEEDED, message, details)


class ServiceError(BaseEditorError):
    """The edit service was reachable but reported a failure.

    ``service_message`` holds the ``error`` field of the response body, if
    the service sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        service_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        spec: ErrorSpec = ErrorRegistry.ERROR_SERVICE_FAILED,
    ):
        super().__init__(spec, message, details)
        self.status_code = status_code
        self.service_message = service_message


class MalformedResponseError(ServiceError):
    """Success status, but the body has no usable image."""

    def __init__(
        self,
        message: str = "No image returned from API",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            details=details,
            spec=ErrorRegistry.ERROR_SERVICE_NO_IMAGE,
        )


class TransportError(BaseEditorError):
    """The service could not be reached or its response could not be parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorRegistry.ERROR_SERVICE_UNREACHABLE, message, details)
