"""Settings loading and the environment dependent error bodies"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from lunch_api.application import create_app
from lunch_api.core.config import Settings
from lunch_api.core.constants import AuthConfig
from conftest import TEST_SECRET

ENV_VARS = ("ENVIRONMENT", "NODE_ENV", "DATABASE_URL", "JWT_SECRET", "JWT_EXPIRY_MINUTES", "CLIENT_ORIGIN", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.environment == "development"
        assert settings.jwt_expiry_minutes == AuthConfig.DEFAULT_EXPIRE_MINUTES
        assert settings.jwt_algorithm == "HS256"
        assert not settings.is_production

    def test_reads_environment(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")
        clean_env.setenv("DATABASE_URL", "sqlite://")
        clean_env.setenv("JWT_SECRET", "s3cret")
        clean_env.setenv("JWT_EXPIRY_MINUTES", "30")
        clean_env.setenv("CLIENT_ORIGIN", "https://lunch.example.com")

        settings = Settings.from_env()

        assert settings.is_production
        assert settings.database_url == "sqlite://"
        assert settings.jwt_secret == "s3cret"
        assert settings.jwt_expiry_minutes == 30
        assert settings.client_origin == "https://lunch.example.com"

    def test_node_env_fallback(self, clean_env):
        clean_env.setenv("NODE_ENV", "testing")
        assert Settings.from_env().environment == "testing"

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")


def _failing_app(environment):
    app = create_app(Settings(environment=environment, database_url="sqlite://", jwt_secret=TEST_SECRET))

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    @app.get("/db-boom")
    def db_boom():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    return app


class TestServerErrors:
    """Unexpected failures map to 500 with an environment dependent body"""

    def test_production_hides_detail(self):
        client = TestClient(_failing_app("production"), raise_server_exceptions=False)
        response = client.get("/boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": {"message": "server error"}}

    def test_development_echoes_detail(self):
        client = TestClient(_failing_app("development"), raise_server_exceptions=False)
        response = client.get("/boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"message": "kaboom", "error": "RuntimeError"}

    def test_database_error_in_production(self):
        client = TestClient(_failing_app("production"), raise_server_exceptions=False)
        response = client.get("/db-boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": {"message": "server error"}}

    def test_database_error_in_development(self):
        client = TestClient(_failing_app("development"), raise_server_exceptions=False)
        response = client.get("/db-boom")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "OperationalError"
