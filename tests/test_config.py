"""
Notes API — Configuration & Lifespan Tests
============================================

What we test:
    ✅ startup refuses to run without a signing secret
    ✅ settings validators (log level, algorithm)
    ✅ settings are frozen after construction
    ✅ pool options only reach server databases
"""

import pydantic
import pytest

from notes_api.config import Settings
from notes_api.database import engine_options
from notes_api.main import create_app, lifespan


class TestSettings:

    def test_missing_secret_fails_validation(self):
        settings = Settings(jwt_secret_key="")
        with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
            settings.validate_required_for_production()

    def test_blank_secret_fails_validation(self):
        with pytest.raises(ValueError):
            Settings(jwt_secret_key="   ").validate_required_for_production()

    def test_configured_secret_passes(self):
        Settings(jwt_secret_key="s3cret").validate_required_for_production()

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(log_level="LOUD")

    def test_non_hmac_algorithm_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(jwt_algorithm="RS256")

    def test_settings_are_frozen(self):
        settings = Settings(jwt_secret_key="s3cret")
        with pytest.raises(pydantic.ValidationError):
            settings.jwt_secret_key = "other"

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestEngineOptions:

    def test_sqlite_keeps_default_pool(self):
        options = engine_options(Settings(database_url="sqlite+aiosqlite:///:memory:"))
        assert "pool_size" not in options
        assert "max_overflow" not in options

    def test_server_database_gets_pool_sizing(self):
        options = engine_options(
            Settings(
                database_url="postgresql+asyncpg://u:p@db/notes",
                db_pool_size=5,
                db_max_overflow=2,
            )
        )
        assert options["pool_size"] == 5
        assert options["max_overflow"] == 2


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_aborts_without_secret(self, tmp_path):
        app = create_app(
            Settings(
                database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
                jwt_secret_key="",
            )
        )
        with pytest.raises(ValueError):
            async with lifespan(app):
                pass
        assert not hasattr(app.state, "token_service")

    @pytest.mark.asyncio
    async def test_startup_builds_services(self, test_settings):
        app = create_app(test_settings)
        async with lifespan(app):
            token = app.state.token_service.issue(7)
            assert app.state.token_service.verify(token) == 7
            await app.state.database.ping()
