import pytest
from app.config import load_settings

ENV_VARS = ("DATABASE_URL", "ALLOWED_ORIGIN", "HOST", "PORT",
            "POOL_MIN_SIZE", "POOL_MAX_SIZE", "POOL_TIMEOUT")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.port == 3000
        assert settings.allowed_origin == "http://localhost:8501"
        assert settings.pool_min_size == 1
        assert settings.pool_max_size == 10
        assert settings.pool_timeout == 30.0

    def test_reads_environment(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql://db.example:37859/tsdb?sslmode=require")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("ALLOWED_ORIGIN", "https://courses.example.edu")
        settings = load_settings()
        assert settings.database_url == "postgresql://db.example:37859/tsdb?sslmode=require"
        assert settings.port == 8080
        assert settings.allowed_origin == "https://courses.example.edu"

    def test_blank_integer_uses_default(self, clean_env):
        clean_env.setenv("POOL_MAX_SIZE", "  ")
        assert load_settings().pool_max_size == 10

    def test_bad_integer_names_variable(self, clean_env):
        clean_env.setenv("PORT", "three thousand")
        with pytest.raises(ValueError, match="PORT"):
            load_settings()
