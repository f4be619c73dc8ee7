# =============================================================================
# gateway/routers/ - Route Definitions
# =============================================================================
# - root.py: Landing page (static HTML)
# - health.py: Health and readiness checks
# - metrics.py: Process metrics
#
# Each router is mounted in main.py without a prefix.
# =============================================================================

from . import health
from . import metrics
from . import root

__all__ = [
    "health",
    "metrics",
    "root",
]
