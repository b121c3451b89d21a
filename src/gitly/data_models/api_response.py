from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE = "Request processed successfully"


# =============================================================================
#   ResponseStatus
# =============================================================================
class ResponseStatus(str, Enum):
    """Outcome of a request.

    FAILURE is an expected negative business outcome the caller can act on,
    ERROR is an exception classified by the global error handlers.
    """

    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    FAILURE = "FAILURE"


# =============================================================================
#   Error detail
# =============================================================================
class FieldViolation(BaseModel):
    """A single rejected field reported by request validation."""

    model_config = ConfigDict(frozen=True)

    field: str
    rejectedValue: Optional[Any] = None
    message: str


class ApiError(BaseModel):
    """Machine-readable error detail attached to non-success envelopes."""

    model_config = ConfigDict(frozen=True)

    code: str
    details: Optional[str] = None
    validationErrors: Optional[List[FieldViolation]] = None
    metadata: Optional[Dict[str, Any]] = None
    stackTrace: Optional[str] = None


# =============================================================================
#   ApiResponse
# =============================================================================
class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every JSON response of the API.

    Build instances through the module-level factories:

        success(payload)
        success(payload, message="Link created")
        success(message="Link deleted")
        error("Validation failed", api_error)
        failure("Link limit reached")

    Fields left unset are dropped from the wire representation (see ``to_wire``).
    """

    status: ResponseStatus
    message: str
    data: Optional[T] = None
    error: Optional[ApiError] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    path: Optional[str] = None

    # -------------------------------------------------------------------------
    def with_path(self, path: str) -> "ApiResponse[T]":
        """Record the originating request path and return this same envelope.

        Mutates in place; call it once, as the last step before responding.
        """
        self.path = path
        return self

    # -------------------------------------------------------------------------
    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with every absent (None) field omitted."""
        return self.model_dump(mode="json", exclude_none=True)


# =============================================================================
#   Factories
# =============================================================================
def success(data: Optional[T] = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> ApiResponse[T]:
    return ApiResponse(status=ResponseStatus.SUCCESS, message=message, data=data)


def error(message: str, api_error: Optional[ApiError] = None) -> ApiResponse[Any]:
    return ApiResponse(status=ResponseStatus.ERROR, message=message, error=api_error)


def failure(message: str, data: Optional[T] = None) -> ApiResponse[T]:
    return ApiResponse(status=ResponseStatus.FAILURE, message=message, data=data)
