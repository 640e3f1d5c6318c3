"""Tests for environment-driven settings."""

import pytest

from zkstudy.shared.settings import Settings, load_settings


class TestLoadSettings:
    """Tests for load_settings parsing and validation."""

    def test_defaults(self):
        settings = load_settings({})

        assert settings == Settings()
        assert settings.allowed_origins == ("http://localhost:3000",)
        assert settings.port == 3400
        assert settings.deadline_seconds == 60.0
        assert settings.llm_max_attempts == 1

    def test_values_from_environment(self):
        settings = load_settings(
            {
                "ALLOWED_ORIGINS": "https://a.example.com/, https://b.example.com",
                "PORT": "8080",
                "PIPELINE_DEADLINE_SECONDS": "2.5",
                "OPENAI_API_KEY": "sk-test",
                "LLM_BACKEND": "Fixture",
                "LLM_MAX_ATTEMPTS": "3",
                "LOG_LEVEL": "debug",
                "LOG_FORMAT": "json",
                "DEBUG_LOG_DIR": "/tmp/zk-logs",
            }
        )

        assert settings.allowed_origins == ("https://a.example.com", "https://b.example.com")
        assert settings.port == 8080
        assert settings.deadline_seconds == 2.5
        assert settings.openai_api_key == "sk-test"
        assert settings.llm_backend == "fixture"
        assert settings.llm_max_attempts == 3
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.debug_log_dir == "/tmp/zk-logs"

    def test_blank_values_fall_back_to_defaults(self):
        settings = load_settings({"PORT": " ", "ALLOWED_ORIGINS": ",", "OPENAI_API_KEY": ""})

        assert settings.port == 3400
        assert settings.allowed_origins == ("http://localhost:3000",)
        assert settings.openai_api_key is None

    @pytest.mark.parametrize(
        "environ",
        [
            {"PIPELINE_DEADLINE_SECONDS": "0"},
            {"PIPELINE_DEADLINE_SECONDS": "soon"},
            {"PORT": "http"},
            {"LLM_MAX_ATTEMPTS": "0"},
            {"LLM_BACKEND": "anthropic"},
            {"LOG_FORMAT": "xml"},
        ],
    )
    def test_invalid_values_rejected(self, environ):
        with pytest.raises(ValueError):
            load_settings(environ)
