from gitly.middleware.request_logging import RequestLoggingMiddleware, get_client_ip

__all__ = ["RequestLoggingMiddleware", "get_client_ip"]
