# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Cloud Gateway:
# - test_routes.py: Endpoint behaviour and the 404 fallback
# - test_middleware.py: Security headers, request IDs, request logging
# - test_exceptions.py: Error mapping and production detail hiding
# - test_config.py: Settings loading
# - test_log.py: JSON log format and stream split
# - test_server.py: uvicorn config, lifespan and process hooks
#
# Run tests with: pytest
# =============================================================================
