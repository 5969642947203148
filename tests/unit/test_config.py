"""Tests for settings."""

import pytest
from pydantic import ValidationError

from pagebuilder.core.config import Settings


@pytest.mark.unit
class TestSettings:
    """Test settings defaults and validation."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PAGEBUILDER_ENABLE_RENDER_CACHE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.storage_backend == "file"
        assert settings.temp_page_prefix == "page_"
        assert settings.html_lang == "en"
        assert settings.max_upload_size == 10 * 1024 * 1024
        assert settings.enable_render_cache is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_STORAGE_BACKEND", "http")
        monkeypatch.setenv("PAGEBUILDER_API_URL", "http://pages.test")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "http"
        assert settings.api_url == "http://pages.test"

    def test_test_environment_disables_cache(self):
        assert Settings(_env_file=None).enable_render_cache is False

    @pytest.mark.parametrize(
        "field,value",
        [
            ("request_timeout", 0),
            ("max_upload_size", -1),
            ("render_cache_size", 0),
            ("storage_backend", "s3"),
            ("temp_page_prefix", ""),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
