import html
import logging
from functools import lru_cache
from pathlib import Path
from string import Template

from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse

from gitly.config import TEMPLATES_DIR, configuration

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

# =============================================================================
#   Router
# =============================================================================
router = APIRouter(tags=["web"], include_in_schema=False)

NOT_FOUND_MESSAGE = "This short link doesn't exist or may have expired"


# =============================================================================
#   Views
# =============================================================================
@lru_cache(maxsize=None)
def _load_view(name: str) -> Template:
    return Template((TEMPLATES_DIR / f"{name}.html").read_text(encoding="utf-8"))


def render_view(name: str, status_code: int = status.HTTP_200_OK, **model: str) -> HTMLResponse:
    """Render one of the HTML views in the templates directory.

    Model values are HTML-escaped before substitution.
    """
    logger.debug("View Name: %s", name)
    context = {"service_name": configuration.app.name, **model}
    content = _load_view(name).safe_substitute({k: html.escape(str(v)) for k, v in context.items()})
    return HTMLResponse(content=content, status_code=status_code)


def render_not_found() -> HTMLResponse:
    """Fallback page for links that resolve to nothing."""
    return render_view(
        "error",
        status_code=status.HTTP_404_NOT_FOUND,
        errorCode="404",
        errorMessage=NOT_FOUND_MESSAGE,
    )


# =============================================================================
#   Home
# =============================================================================
@router.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Landing page."""
    return render_view("index")
