# =============================================================================
# gateway/ - Cloud Gateway Package
# =============================================================================
# A small HTTP gateway serving a landing page plus health, readiness and
# metrics endpoints:
# - main.py: App factory, exception handlers, router mounting
# - config.py: Environment variable loading and settings
# - middleware.py: Request pipeline (request IDs, logging, security headers)
# - exceptions.py: Error taxonomy and JSON error envelopes
# - log.py: JSON log formatting
# - server.py: uvicorn runner and process-level error hooks
# - routers/: Endpoint definitions
# =============================================================================

__version__ = "1.0.0"
