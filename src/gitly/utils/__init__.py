from gitly.utils.exceptions import BusinessException, BusinessExceptionBuilder
from gitly.utils.logging import setup_logging

__all__ = [
    "setup_logging",
    "BusinessException",
    "BusinessExceptionBuilder",
]
