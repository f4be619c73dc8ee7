# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from gateway.config import Settings

ENV_VARS = ["PORT", "HOSTNAME", "NODE_ENV", "ENVIRONMENT", "LOG_LEVEL", "SHUTDOWN_TIMEOUT"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear gateway variables and run from a directory without a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSettings:
    """Tests for loading Settings from the environment."""

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.PORT == 3000
        assert settings.HOSTNAME == "0.0.0.0"
        assert settings.ENVIRONMENT == "development"
        assert settings.LOG_LEVEL == "info"
        assert settings.SHUTDOWN_TIMEOUT == 10
        assert not settings.is_production

    def test_reads_environment(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("HOSTNAME", "127.0.0.1")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.PORT == 8080
        assert settings.HOSTNAME == "127.0.0.1"
        assert settings.LOG_LEVEL == "debug"

    def test_node_env_sets_environment(self, clean_env):
        clean_env.setenv("NODE_ENV", "production")

        settings = Settings()

        assert settings.ENVIRONMENT == "production"
        assert settings.is_production

    def test_environment_alias(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")

        assert Settings().is_production

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("PORT=4000\nNODE_ENV=production\n")

        settings = Settings()

        assert settings.PORT == 4000
        assert settings.is_production

    def test_invalid_port_rejected(self, clean_env):
        clean_env.setenv("PORT", "70000")

        with pytest.raises(ValidationError):
            Settings()

    def test_frozen(self, clean_env):
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.PORT = 9999
