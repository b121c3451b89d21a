from gitly.data_models.api_response import (
    ApiError,
    ApiResponse,
    FieldViolation,
    ResponseStatus,
    error,
    failure,
    success,
)
from gitly.data_models.user import Role, User

__all__ = [
    "ApiError",
    "ApiResponse",
    "FieldViolation",
    "ResponseStatus",
    "error",
    "failure",
    "success",
    "Role",
    "User",
]
