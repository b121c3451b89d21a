from typing import Optional

from fastapi import status

# =============================================================================
#   Domain Exceptions
# =============================================================================
DEFAULT_BUSINESS_ERROR_CODE = "BUSINESS_ERROR"


class BusinessException(Exception):
    """Raised by application code for an expected business rule violation.

    Carries a machine-readable code and the HTTP status the global error
    handlers should answer with. Build it directly or through the builder:

        raise BusinessException.builder() \\
            .message("Short link already taken") \\
            .error_code("ALIAS_TAKEN") \\
            .http_status(status.HTTP_409_CONFLICT) \\
            .build()

    Raises:
        ValueError: If ``message`` is None, empty or blank.
    """

    def __init__(
        self,
        message: Optional[str],
        error_code: Optional[str] = None,
        http_status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if message is None or not message.strip():
            raise ValueError("Message is required")
        super().__init__(message)
        self.message = message
        self.error_code = error_code if error_code is not None else DEFAULT_BUSINESS_ERROR_CODE
        self.http_status = http_status if http_status is not None else status.HTTP_400_BAD_REQUEST
        if cause is not None:
            self.__cause__ = cause

    @staticmethod
    def builder() -> "BusinessExceptionBuilder":
        return BusinessExceptionBuilder()


class BusinessExceptionBuilder:
    """Fluent builder for :class:`BusinessException`."""

    def __init__(self) -> None:
        self._message: Optional[str] = None
        self._error_code: str = DEFAULT_BUSINESS_ERROR_CODE
        self._http_status: int = status.HTTP_400_BAD_REQUEST
        self._cause: Optional[BaseException] = None

    def message(self, message: str) -> "BusinessExceptionBuilder":
        self._message = message
        return self

    def error_code(self, error_code: str) -> "BusinessExceptionBuilder":
        self._error_code = error_code
        return self

    def http_status(self, http_status: int) -> "BusinessExceptionBuilder":
        self._http_status = http_status
        return self

    def cause(self, cause: BaseException) -> "BusinessExceptionBuilder":
        self._cause = cause
        return self

    def build(self) -> BusinessException:
        return BusinessException(
            message=self._message,
            error_code=self._error_code,
            http_status=self._http_status,
            cause=self._cause,
        )
