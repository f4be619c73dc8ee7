# =============================================================================
# gateway/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for values the app owns.
# These are injected into route handlers using Depends().
# =============================================================================

import time
from typing import Annotated

from fastapi import Depends, Request

from gateway.config import Settings


def get_app_settings(request: Request) -> Settings:
    """
    Get the Settings the app was created with.
    """
    return request.app.state.settings


def get_uptime(request: Request) -> float:
    """
    Seconds since the app was created.
    """
    return max(0.0, time.monotonic() - request.app.state.started_at)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
UptimeDep = Annotated[float, Depends(get_uptime)]
