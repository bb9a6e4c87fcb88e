"""Tests for application configuration loading."""

from __future__ import annotations

import os
from unittest.mock import patch

from quiniela.core.config import Settings, get_settings


class TestSettingsDefaults:
    """Settings should load with sane defaults (no .env required)."""

    def test_settings_loads_without_env_file(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        assert s.app_env == "development"
        assert s.log_level == "INFO"
        assert s.log_format == "text"

    def test_default_env_is_development(self):
        s = Settings(_env_file=None)
        assert s.is_development is True
        assert s.is_production is False
        assert s.is_testing is False

    def test_cors_defaults(self):
        s = Settings(_env_file=None)
        assert s.cors_origins == "*"
        assert s.cors_origin_list == ["*"]

    def test_get_settings_returns_instance(self):
        assert isinstance(get_settings(), Settings)


class TestSettingsFromEnv:
    def test_prefixed_env_vars(self):
        env = {"QUINIELA_APP_ENV": "production", "QUINIELA_LOG_FORMAT": "json"}
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)
        assert s.is_production is True
        assert s.log_format == "json"

    def test_unprefixed_vars_ignored(self):
        with patch.dict(os.environ, {"APP_ENV": "production"}, clear=True):
            s = Settings(_env_file=None)
        assert s.app_env == "development"

    def test_cors_origin_list_parsing(self):
        s = Settings(_env_file=None, cors_origins="https://a.example, https://b.example,")
        assert s.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("QUINIELA_APP_PORT=9100\nQUINIELA_APP_DEBUG=false\n")
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=str(env_file))
        assert s.app_port == 9100
        assert s.app_debug is False
