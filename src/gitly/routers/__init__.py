from gitly.routers.health_router import router as health_router
from gitly.routers.web_router import router as web_router

__all__ = ["health_router", "web_router"]
