"""
Shared error handling for Permix.
"""

from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class PermixException(Exception):
    """Base exception for Permix."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidRulesError(PermixException):
    """Rules are not a mapping of mappings with boolean or callable leaves."""

    def __init__(self, message: str = "[Permix]: Permissions are not valid.", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_RULES", message, details)


class InvalidInstanceError(PermixException):
    """Object passed where a Permix instance was expected."""

    def __init__(self, message: str = "[Permix]: Permix instance is not valid", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_INSTANCE", message, details)


class NotReadyError(PermixException):
    """Operation requires setup to have completed at least once."""

    def __init__(
        self,
        message: str = "[Permix]: To dehydrate Permix, `setup` must be called first.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__("NOT_READY", message, details)


class PermixNotFoundError(PermixException):
    """No instance is attached to an adapter context."""

    def __init__(
        self,
        message: str = "[Permix]: Permix not found. Please use the setup function to attach permix to the context.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__("PERMIX_NOT_FOUND", message, details)
