# =============================================================================
# gateway/routers/root.py - Landing Page
# =============================================================================
# Serves the static landing page shipped in gateway/static/index.html.
# =============================================================================

from functools import lru_cache
from importlib import resources

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()


@lru_cache
def landing_page() -> str:
    """Read the landing page once and keep it in memory."""
    return resources.files("gateway").joinpath("static/index.html").read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
async def index():
    """
    Landing page.
    """
    return HTMLResponse(content=landing_page())
