"""
Tests for environment driven settings.
"""

import pytest
from pydantic import ValidationError

from app import config
from app.config import Settings

REQUIRED = {
    "db_uri": "postgresql://rentify:secret@db:5432/",
    "db_name": "rentify",
    "jwt_secret_key": "k",
    "sendgrid_api_key": "SG.key",
    "sendgrid_from_email": "noreply@rentify.io",
}


def make_settings(**overrides) -> Settings:
    values = dict(REQUIRED)
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:

    def test_database_url_uses_async_driver(self):
        settings = make_settings()
        assert settings.database_url == "postgresql+asyncpg://rentify:secret@db:5432/rentify"

    def test_async_driver_kept(self):
        settings = make_settings(db_uri="postgresql+asyncpg://db:5432")
        assert settings.database_url == "postgresql+asyncpg://db:5432/rentify"

    def test_sqlite_memory_url(self):
        settings = make_settings(db_uri="sqlite://", db_name=":memory:")
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_default_token_window(self):
        assert make_settings().access_token_expire_minutes == 24 * 60

    def test_cors_origins(self):
        settings = make_settings(cors_origin="https://rentify.io, http://localhost:5173,")
        assert settings.cors_origins == ["http://localhost:5173", "https://rentify.io"]

    def test_settings_are_frozen(self):
        settings = make_settings()
        with pytest.raises(ValidationError):
            settings.port = 9000

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(environment="qa")

    def test_blank_signing_key_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(jwt_secret_key="   ")

    def test_missing_required_variable(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
        values = dict(REQUIRED)
        del values["jwt_secret_key"]

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, **values)

        assert {error["loc"][0] for error in exc_info.value.errors()} == {"jwt_secret_key"}

    def test_startup_exits_on_missing_configuration(self, monkeypatch):
        monkeypatch.delenv("SENDGRID_API_KEY", raising=False)
        values = dict(REQUIRED)
        del values["sendgrid_api_key"]
        monkeypatch.setattr(config, "get_settings", lambda: Settings(_env_file=None, **values))

        with pytest.raises(SystemExit) as exc_info:
            config.load_settings_or_exit()

        assert exc_info.value.code == 1
