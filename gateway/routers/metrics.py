# =============================================================================
# gateway/routers/metrics.py - Process Metrics
# =============================================================================
# Reports uptime, memory usage and the Python runtime version.
# =============================================================================

import platform

import psutil
from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from gateway.dependencies import UptimeDep
from gateway.log import utc_timestamp

router = APIRouter()


class MemoryUsage(BaseModel):
    """Memory used by the gateway process, in bytes."""
    rss: int
    vms: int
    percent: float


class MetricsResponse(BaseModel):
    """Metrics snapshot."""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    uptime: float
    memory: MemoryUsage
    runtime_version: str = Field(alias="runtimeVersion")


def memory_usage() -> MemoryUsage:
    """Read memory usage of the current process from psutil."""
    process = psutil.Process()
    info = process.memory_info()
    return MemoryUsage(
        rss=info.rss,
        vms=info.vms,
        percent=round(process.memory_percent(), 3),
    )


def runtime_version() -> str:
    """e.g. "CPython 3.12.4"."""
    return f"{platform.python_implementation()} {platform.python_version()}"


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(uptime: UptimeDep):
    """
    Metrics endpoint.
    """
    return MetricsResponse(
        timestamp=utc_timestamp(),
        uptime=uptime,
        memory=memory_usage(),
        runtime_version=runtime_version(),
    )
