"""
Unit tests for settings and policy construction.
"""

import pytest

from docrel.config.settings import Settings
from docrel.inference.policy import InferencePolicy


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOCREL_DEFAULT_STRING_WIDTH", raising=False)
        monkeypatch.delenv("DOCREL_ALWAYS_WITH_PRIMARY_KEY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.default_string_width == 128
        assert settings.always_with_primary_key is False
        assert settings.default_schema is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DOCREL_DEFAULT_STRING_WIDTH", "64")
        monkeypatch.setenv("DOCREL_ALWAYS_WITH_PRIMARY_KEY", "true")
        monkeypatch.setenv("DOCREL_DEFAULT_SCHEMA", "crm")

        settings = Settings(_env_file=None)

        assert settings.default_string_width == 64
        assert settings.always_with_primary_key is True
        assert settings.default_schema == "crm"


class TestInferencePolicy:
    """Tests for InferencePolicy."""

    def test_from_settings(self, test_settings):
        settings = test_settings.model_copy(update={
            "always_with_primary_key": True,
            "default_string_width": 32,
        })

        policy = InferencePolicy.from_settings(settings)

        assert policy == InferencePolicy(always_with_primary_key=True, default_string_width=32)

    @pytest.mark.parametrize("width", [0, -1])
    def test_rejects_non_positive_width(self, width):
        with pytest.raises(ValueError):
            InferencePolicy(default_string_width=width)
