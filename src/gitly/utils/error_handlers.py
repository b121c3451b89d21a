"""Global exception handlers registered on the FastAPI application.

Every exception escaping a route ends up here exactly once and is translated
into an ``ApiResponse`` envelope plus an HTTP status:

    body / field validation failure    → 400 VALIDATION_ERROR
    parameter type coercion failure    → 400 TYPE_MISMATCH
    no route matches                   → 404 RESOURCE_NOT_FOUND
    BusinessException                  → its own status and code
    other framework HTTP errors        → their own status, HTTP_<status>
    anything else                      → 500 INTERNAL_SERVER_ERROR
"""

import logging
import traceback
import types
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union, get_args, get_origin

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from gitly.data_models.api_response import ApiError, ApiResponse, FieldViolation, error, failure
from gitly.routers.web_router import render_not_found
from gitly.utils.exceptions import BusinessException

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

VALIDATION_ERROR = "VALIDATION_ERROR"
TYPE_MISMATCH = "TYPE_MISMATCH"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

GENERIC_ERROR_DETAILS = "An unexpected error occurred. Please try again later."

_PARAMETER_LOCATIONS = {"path", "query", "header", "cookie"}
_LOCATION_PREFIXES = _PARAMETER_LOCATIONS | {"body"}
_COERCION_ERROR_TYPES = {"enum", "literal_error"}


# =============================================================================
#   Helpers
# =============================================================================
def _envelope_response(status_code: int, response: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.to_wire())


def _format_location(location: Sequence[Any]) -> str:
    """Turn a pydantic error location into a dotted field name."""
    parts = [str(part) for part in location if part not in _LOCATION_PREFIXES]
    if parts:
        return ".".join(parts)
    if not location:
        return "request"
    return str(location[0])


def _to_field_violation(issue: Dict[str, Any]) -> FieldViolation:
    rejected = None if issue.get("type") == "missing" else issue.get("input")
    return FieldViolation(
        field=_format_location(issue.get("loc", ())),
        rejectedValue=rejected,
        message=str(issue.get("msg", "Invalid value")),
    )


def _find_type_mismatch(errors: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return the first request parameter whose value could not be coerced, if any.

    Body errors, missing parameters and constraint failures (ge, pattern, ...)
    on a correctly typed value are regular validation failures.
    """
    for issue in errors:
        location = issue.get("loc", ())
        if location and location[0] in _PARAMETER_LOCATIONS and _is_coercion_error(issue.get("type", "")):
            return issue
    return None


def _is_coercion_error(error_type: str) -> bool:
    return (
        error_type.endswith("_parsing")
        or error_type.endswith("_type")
        or error_type in _COERCION_ERROR_TYPES
    )


def _expected_type_name(request: Request, location: Sequence[Any]) -> str:
    """Resolve the declared type of a route parameter, or 'unknown'."""
    route = request.scope.get("route")
    dependant = getattr(route, "dependant", None)
    if dependant is None or len(location) < 2:
        return "unknown"

    params_by_location = {
        "path": dependant.path_params,
        "query": dependant.query_params,
        "header": dependant.header_params,
        "cookie": dependant.cookie_params,
    }
    for param in params_by_location.get(location[0], []):
        if location[1] in (param.name, param.alias):
            return _type_name(getattr(param.field_info, "annotation", None))
    return "unknown"


def _type_name(annotation: Any) -> str:
    """Name a parameter annotation, unwrapping Optional[X] and X | None to X."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            annotation = args[0]
    return getattr(annotation, "__name__", None) or str(annotation)


def _stack_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


# =============================================================================
#   Handlers
# =============================================================================
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI validation failures to VALIDATION_ERROR or TYPE_MISMATCH."""
    errors = list(exc.errors())
    mismatch = _find_type_mismatch(errors)

    if mismatch is not None:
        return _type_mismatch_response(request, mismatch)

    logger.warning("Validation error on request: %s %s", request.method, request.url.path)

    violations: List[FieldViolation] = [_to_field_violation(issue) for issue in errors]
    api_error = ApiError(
        code=VALIDATION_ERROR,
        details="Request validation failed",
        validationErrors=violations,
    )
    response = error("Validation failed", api_error).with_path(request.url.path)
    return _envelope_response(status.HTTP_400_BAD_REQUEST, response)


def _type_mismatch_response(request: Request, issue: Dict[str, Any]) -> JSONResponse:
    location = issue.get("loc", ())
    name = str(location[1]) if len(location) > 1 else _format_location(location)
    details = "Invalid value '{}' for parameter '{}'. Expected type: {}".format(
        issue.get("input"),
        name,
        _expected_type_name(request, location),
    )

    logger.warning("Type mismatch error on request: %s %s (%s)", request.method, request.url.path, details)

    api_error = ApiError(code=TYPE_MISMATCH, details=details)
    response = error("Invalid parameter type", api_error).with_path(request.url.path)
    return _envelope_response(status.HTTP_400_BAD_REQUEST, response)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Map routing misses to RESOURCE_NOT_FOUND and other HTTP errors to HTTP_<status>."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and request.scope.get("route") is None:
        return _not_found_response(request)

    logger.warning(
        "HTTP %d on request: %s %s (%s)", exc.status_code, request.method, request.url.path, exc.detail
    )

    message = str(exc.detail) if exc.detail else "Request failed"
    api_error = ApiError(code=f"HTTP_{exc.status_code}", details=message)
    response = error(message, api_error).with_path(request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=response.to_wire(),
        headers=getattr(exc, "headers", None),
    )


def _not_found_response(request: Request) -> Response:
    logger.warning("Resource not found: %s %s", request.method, request.url.path)

    if "text/html" in request.headers.get("accept", ""):
        return render_not_found()

    api_error = ApiError(
        code=RESOURCE_NOT_FOUND,
        details=f"No handler found for {request.method} {request.url.path}",
    )
    response = error("Resource not found", api_error).with_path(request.url.path)
    return _envelope_response(status.HTTP_404_NOT_FOUND, response)


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """Answer with the exception's own status and code as a FAILURE envelope."""
    logger.warning(
        "Business exception on request: %s %s [%s] %s",
        request.method, request.url.path, exc.error_code, exc.message,
    )

    response = failure(exc.message).with_path(request.url.path)
    response.error = ApiError(code=exc.error_code, details=exc.message)
    return _envelope_response(exc.http_status, response)


def make_unhandled_exception_handler(debug: bool):
    """Build the catch-all handler; ``debug`` attaches the stack trace to the response."""

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unexpected error on request: %s %s", request.method, request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )

        api_error = ApiError(
            code=INTERNAL_SERVER_ERROR,
            details=GENERIC_ERROR_DETAILS,
            stackTrace=_stack_trace(exc) if debug else None,
        )
        response = error("Internal server error", api_error).with_path(request.url.path)
        return _envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, response)

    return unhandled_exception_handler


# =============================================================================
#   Registration
# =============================================================================
def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach all error handlers to a FastAPI app instance.

    Args:
        app: The application to configure.
        debug: Include stack traces in 500 responses.
    """
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(Exception, make_unhandled_exception_handler(debug))
