"""
Notes Proxy — Configuration Tests
==================================

What we test:
    ✅ Validators normalize and reject log levels and safety thresholds
    ✅ Comma-separated CORS settings are parsed into lists
    ✅ A missing or placeholder API key is reported by name
    ✅ A missing API key aborts application startup
"""

import pytest
from fastapi import FastAPI
from pydantic import ValidationError as PydanticValidationError

from notes_proxy.config import Settings, settings
from notes_proxy.exceptions import ConfigurationMissingError
from notes_proxy.lifecycle import lifespan


class TestSettingsValidation:

    def test_log_level_is_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="verbose")

    def test_safety_threshold_is_uppercased(self):
        s = Settings(gemini_safety_threshold="block_only_high")
        assert s.gemini_safety_threshold == "BLOCK_ONLY_HIGH"

    def test_invalid_safety_threshold(self):
        with pytest.raises(PydanticValidationError):
            Settings(gemini_safety_threshold="BLOCK_EVERYTHING")

    def test_timeout_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Settings(generation_timeout=0)

    def test_cors_lists(self):
        s = Settings(
            cors_origins=" http://localhost:8100 , capacitor://localhost,,",
            cors_allow_methods="post, options",
        )
        assert s.cors_origins_list == ["http://localhost:8100", "capacitor://localhost"]
        assert s.cors_methods_list == ["POST", "OPTIONS"]

    def test_default_origins_cover_mobile_shells(self):
        origins = Settings().cors_origins_list
        assert "capacitor://localhost" in origins
        assert "ionic://localhost" in origins
        assert "http://localhost:8100" in origins


class TestRequiredSettings:

    def test_configured_key_passes(self):
        Settings(gemini_api_key="abc").validate_required()

    @pytest.mark.parametrize("key", ["", "   ", "your_gemini_api_key_here"])
    def test_missing_key_is_named(self, key):
        with pytest.raises(ConfigurationMissingError) as exc_info:
            Settings(gemini_api_key=key).validate_required()
        assert "GEMINI_API_KEY" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_key_aborts_startup(self, monkeypatch):
        monkeypatch.setattr(settings, "gemini_api_key", "")

        with pytest.raises(ConfigurationMissingError):
            async with lifespan(FastAPI(title="startup check")):
                pass
