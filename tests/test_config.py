"""Tests for environment-driven settings."""

import pytest

from video_catalog.config import DEFAULT_DATABASE_URL, DEFAULT_JWT_SECRET, Settings

ENV_NAMES = [
    "DATABASE_URL",
    "JWT_SECRET",
    "JWT_ALGORITHM",
    "DEBUG",
    "MAX_PAGE_LIMIT",
    "CORS_ORIGINS",
    "LOG_LEVEL",
]


def clear_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(f"VIDEO_CATALOG_{name}", raising=False)


class TestSettingsFromEnv:
    """Test Settings.from_env."""

    def test_defaults(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("VIDEO_CATALOG_JWT_SECRET", "s3cret")
        settings = Settings.from_env(str(tmp_path / "missing.env"))
        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.jwt_secret == "s3cret"
        assert settings.debug is False
        assert settings.max_page_limit is None
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("VIDEO_CATALOG_DATABASE_URL", "sqlite:///:memory:")
        monkeypatch.setenv("VIDEO_CATALOG_JWT_SECRET", "s3cret")
        monkeypatch.setenv("VIDEO_CATALOG_DEBUG", "true")
        monkeypatch.setenv("VIDEO_CATALOG_MAX_PAGE_LIMIT", "50")
        monkeypatch.setenv("VIDEO_CATALOG_CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("VIDEO_CATALOG_LOG_LEVEL", "debug")

        settings = Settings.from_env(str(tmp_path / "missing.env"))

        assert settings.database_url == "sqlite:///:memory:"
        assert settings.jwt_secret == "s3cret"
        assert settings.debug is True
        assert settings.max_page_limit == 50
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.log_level == "DEBUG"

    def test_missing_secret_rejected(self, monkeypatch, tmp_path):
        """Without a secret the service refuses to start outside debug mode."""
        clear_env(monkeypatch)
        with pytest.raises(ValueError, match="JWT_SECRET"):
            Settings.from_env(str(tmp_path / "missing.env"))

    def test_missing_secret_allowed_in_debug(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("VIDEO_CATALOG_DEBUG", "1")
        settings = Settings.from_env(str(tmp_path / "missing.env"))
        assert settings.jwt_secret == DEFAULT_JWT_SECRET
        assert settings.debug is True

    def test_bad_page_limit_ignored(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        monkeypatch.setenv("VIDEO_CATALOG_JWT_SECRET", "s3cret")
        monkeypatch.setenv("VIDEO_CATALOG_MAX_PAGE_LIMIT", "lots")
        assert Settings.from_env(str(tmp_path / "missing.env")).max_page_limit is None

    def test_dotenv_file(self, monkeypatch, tmp_path):
        clear_env(monkeypatch)
        # registers the variable so the value loaded from the file is undone
        monkeypatch.setenv("VIDEO_CATALOG_JWT_SECRET", "placeholder")
        monkeypatch.delenv("VIDEO_CATALOG_JWT_SECRET")
        env_file = tmp_path / ".env"
        env_file.write_text("VIDEO_CATALOG_JWT_SECRET=from-file\n")
        settings = Settings.from_env(str(env_file))
        assert settings.jwt_secret == "from-file"
