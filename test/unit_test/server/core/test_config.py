"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables and that
the grouped configuration models are derived from it.
"""

import pytest

from coworkspace.server.core.config import AuthConfig, CORSConfig, LogfireConfig, Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the variables the test suite sets globally."""
    for name in (
        "DATABASE_URL",
        "JWT_SECRET",
        "PASSWORD_HASH_ROUNDS",
        "LOGFIRE_ENABLED",
        "COWORKSPACE_LOG_LEVEL",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_binding(self, monkeypatch):
        monkeypatch.setenv("COWORKSPACE_SERVER_HOST", "127.0.0.1")
        monkeypatch.setenv("COWORKSPACE_SERVER_PORT", "9000")
        monkeypatch.setenv("COWORKSPACE_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 9000
        assert settings.log_level == "DEBUG"

    def test_database_url_binding(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/spaces")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/spaces"

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.server_port == 8000
        assert settings.log_level == "INFO"
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.jwt_algorithm == "HS256"
        assert settings.jwt_expires_minutes == 1440
        assert settings.logfire_enabled is False

    def test_cors_origins_parse_json_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://app.example.com", "https://admin.example.com"]')

        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["https://app.example.com", "https://admin.example.com"]

    def test_invalid_port_is_rejected(self, monkeypatch):
        from pydantic import ValidationError

        monkeypatch.setenv("COWORKSPACE_SERVER_PORT", "not-a-port")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestGroupedConfigs:
    """Grouped configuration models derived from Settings."""

    def test_auth_config(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "s3cret")
        monkeypatch.setenv("JWT_EXPIRES_MINUTES", "30")
        monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "5")

        auth = Settings(_env_file=None).auth

        assert isinstance(auth, AuthConfig)
        assert auth.jwt_secret == "s3cret"
        assert auth.jwt_expires_minutes == 30
        assert auth.password_hash_rounds == 5
        assert auth.jwt_issuer == "coworkspace-api"

    def test_cors_config(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        cors = Settings(_env_file=None).cors

        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["http://localhost:3000"]
        assert cors.allow_credentials is False
        assert cors.allow_methods == ["*"]

    def test_logfire_config(self, monkeypatch):
        monkeypatch.setenv("LOGFIRE_ENABLED", "true")
        monkeypatch.setenv("LOGFIRE_TOKEN", "token-123")
        monkeypatch.setenv("LOGFIRE_ENVIRONMENT", "production")

        logfire = Settings(_env_file=None).logfire

        assert isinstance(logfire, LogfireConfig)
        assert logfire.enabled is True
        assert logfire.token == "token-123"
        assert logfire.environment == "production"
        assert logfire.service_name == "coworkspace-server"

    def test_config_models_accept_field_names(self):
        auth = AuthConfig(jwt_secret="abc", jwt_expires_minutes=5)

        assert auth.jwt_secret == "abc"
        assert auth.jwt_expires_minutes == 5


class TestOptionalSettings:
    """Logging, CORS and Logfire options that have their own variables."""

    def test_logging_options(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("LOG_FILE_DIR", "/var/log/coworkspace")
        monkeypatch.setenv("ENABLE_FILE_LOGGING", "true")

        settings = Settings(_env_file=None)

        assert settings.log_format == "json"
        assert settings.log_file_dir == "/var/log/coworkspace"
        assert settings.enable_file_logging is True

    def test_cors_methods_and_headers_reach_grouped_config(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_METHODS", '["GET", "POST"]')
        monkeypatch.setenv("CORS_ALLOW_HEADERS", '["Authorization"]')

        cors = Settings(_env_file=None).cors

        assert cors.allow_methods == ["GET", "POST"]
        assert cors.allow_headers == ["Authorization"]

    def test_logfire_instrumentation_flags_reach_grouped_config(self, monkeypatch):
        monkeypatch.setenv("LOGFIRE_TRACE_SQLALCHEMY", "false")
        monkeypatch.setenv("LOGFIRE_SERVICE_NAME", "spaces-api")

        logfire = Settings(_env_file=None).logfire

        assert logfire.trace_sqlalchemy is False
        assert logfire.trace_fastapi is True
        assert logfire.service_name == "spaces-api"
