# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up a predictable environment before any imports
# - Provides apps/clients for development and production modes
# - Adds fault-raising routes used by the error-mapping tests
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.pop("NODE_ENV", None)
os.environ.pop("ENVIRONMENT", None)
os.environ["LOG_LEVEL"] = "info"

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gateway.config import Settings
from gateway.exceptions import InternalServerError, ValidationError
from gateway.main import create_app


def _add_fault_routes(app: FastAPI) -> None:
    """Routes that raise, to exercise error mapping end to end."""

    @app.get("/_test/crash")
    async def crash():
        raise RuntimeError("database exploded")

    @app.get("/_test/internal")
    async def internal():
        raise InternalServerError("cache layer unavailable")

    @app.get("/_test/invalid")
    async def invalid():
        raise ValidationError("name must not be empty")

    @app.get("/_test/items/{item_id}")
    async def item(item_id: int):
        return {"item_id": item_id}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Development settings."""
    return Settings(ENVIRONMENT="development", LOG_LEVEL="info")


@pytest.fixture
def production_settings():
    """Production settings."""
    return Settings(ENVIRONMENT="production", LOG_LEVEL="info")


@pytest.fixture
def app(settings):
    app = create_app(settings)
    _add_fault_routes(app)
    return app


@pytest.fixture
def production_app(production_settings):
    app = create_app(production_settings)
    _add_fault_routes(app)
    return app


@pytest.fixture
def client(app):
    """TestClient for a development-mode gateway."""
    return TestClient(app)


@pytest.fixture
def production_client(production_app):
    """TestClient for a production-mode gateway."""
    return TestClient(production_app)


@pytest.fixture
def request_logs(caplog):
    """
    Capture INFO+ records and return a helper that filters by message.
    """
    caplog.set_level(logging.INFO)

    def _records(message: str) -> list[logging.LogRecord]:
        return [r for r in caplog.records if r.getMessage() == message]

    return _records
