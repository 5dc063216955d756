"""
Exception hierarchy shared by all routing adapters.

Every error raised by routekit derives from ``RoutingException`` and carries:
- A stable error code for programmatic handling
- A human readable message
- Optional details with context
"""
from typing import Any, Dict, List, Optional, TypedDict


class RoutingException(Exception):
    """Base exception for all routekit errors."""

    status_code: Optional[int] = None
    error_code: str = "ROUTING_ERROR"
    message: str = "An unexpected routing error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message or self.message
        self.details = details
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the exception for logging or API responses."""
        return {
            "code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


# =============================================================================
# Client-side errors
# =============================================================================

class ValidationException(RoutingException):
    """Invalid arguments passed to an adapter operation."""
    error_code = "VALIDATION_ERROR"
    message = "Invalid routing request"


class ConfigurationException(RoutingException):
    """Adapter misconfigured at construction time."""
    error_code = "CONFIGURATION_ERROR"
    message = "Routing client configuration error"


# =============================================================================
# Provider errors
# =============================================================================

class ProviderHint(TypedDict, total=False):
    """Diagnostic hint attached to a provider error response."""
    message: str
    details: str
    point_index: int


class RoutingAPIError(RoutingException):
    """
    Error returned by (or on the way to) a routing provider.

    Wraps HTTP status, status text, the provider's own error message and
    the provider's diagnostic hints. Transport failures without a response
    leave the status fields as None.
    """
    error_code = "ROUTING_API_ERROR"
    message = "Routing provider request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        status: Optional[str] = None,
        error_message: Optional[str] = None,
        hints: Optional[List[ProviderHint]] = None,
    ):
        self.status_code = status_code
        self.status = status
        self.error_message = error_message
        self.hints = hints if hints is not None else []
        super().__init__(
            message=message,
            details={
                "status": status,
                "error_message": error_message,
                "hints": self.hints,
            },
        )

    def __repr__(self) -> str:
        return (
            f"RoutingAPIError(status_code={self.status_code!r}, "
            f"status={self.status!r}, error_message={self.error_message!r})"
        )
