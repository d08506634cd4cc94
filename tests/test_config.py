"""Tests for the configuration system."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from sellerhub.config import AppConfig, get_config, reset_config


class TestAppConfig:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_FILE", raising=False)
        monkeypatch.delenv("SQLITE_PATH", raising=False)
        config = AppConfig()
        assert config.SUPABASE_URL == ""
        assert config.SELLERS_TABLE == "sellers"
        assert config.SQLITE_PATH == Path("sellerhub_local.db")
        assert config.LOG_FILE == "sellerhub.log"
        assert config.LOG_LEVEL == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        monkeypatch.setenv("SELLERS_TABLE", "vendors")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = AppConfig()
        assert config.SUPABASE_URL == "https://example.supabase.co"
        assert config.SUPABASE_ANON_KEY.get_secret_value() == "anon-key"
        assert config.SELLERS_TABLE == "vendors"
        assert config.LOG_LEVEL == "DEBUG"
        assert config.log_level_number == 10

    def test_dotenv_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("SELLERS_TABLE=from_dotenv\nUNRELATED=1\n")
        assert AppConfig().SELLERS_TABLE == "from_dotenv"

    def test_secret_is_masked(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        assert "anon-key" not in repr(AppConfig())

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="log level"):
            AppConfig()

    def test_warns_when_offline(self, caplog):
        AppConfig()
        assert any("SUPABASE_URL is empty" in r.getMessage() for r in caplog.records)


class TestSingleton:

    def test_same_instance_until_reset(self):
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first
