"""Unit tests for settings."""
import pytest

from src.utils import settings as settings_module
from src.utils.settings import DEFAULT_API_TIMEOUT, DEFAULT_API_URL, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start each test without roster variables and without a .env pass."""
    for key in ("ROSTER_API_URL", "ROSTER_API_TIMEOUT", "ROSTER_CACHE_DIR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_module, "_ENV_LOADED", True)


class TestGetSettings:
    """Test environment-driven configuration."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.api_timeout == DEFAULT_API_TIMEOUT
        assert settings.cache_dir == "data"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ROSTER_API_URL", "http://localhost:8000/")
        monkeypatch.setenv("ROSTER_API_TIMEOUT", "2.5")
        monkeypatch.setenv("ROSTER_CACHE_DIR", "/tmp/roster")

        settings = get_settings()
        assert settings.api_url == "http://localhost:8000"
        assert settings.api_timeout == 2.5
        assert settings.cache_dir == "/tmp/roster"

    @pytest.mark.parametrize("raw", ["soon", "0", "-1"])
    def test_bad_timeout_falls_back_to_default(self, monkeypatch, raw):
        monkeypatch.setenv("ROSTER_API_TIMEOUT", raw)
        assert get_settings().api_timeout == DEFAULT_API_TIMEOUT


class TestEnvFile:
    """Test .env loading."""

    def test_env_file_seeds_missing_keys_only(self, monkeypatch, tmp_path):
        env_path = tmp_path / ".env"
        env_path.write_text(
            "# roster\n"
            "ROSTER_API_URL='http://from-file'\n"
            "ROSTER_CACHE_DIR=/from/file\n"
            "UNRELATED=1\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("ROSTER_CACHE_DIR", "/from/env")
        monkeypatch.setattr(settings_module, "_ENV_LOADED", False)
        # registers the keys for restoration after the test
        monkeypatch.setenv("ROSTER_API_URL", "placeholder")
        monkeypatch.delenv("ROSTER_API_URL")
        monkeypatch.delenv("UNRELATED", raising=False)

        settings_module._load_env_file(env_path)

        settings = get_settings()
        assert settings.api_url == "http://from-file"
        assert settings.cache_dir == "/from/env"
        assert "UNRELATED" not in settings_module.os.environ

    def test_read_env_file_parses_pairs(self, tmp_path):
        env_path = tmp_path / ".env"
        env_path.write_text(
            "\n"
            "# comment\n"
            "NO_EQUALS_SIGN\n"
            'ROSTER_API_URL = "http://quoted"\n'
            "ROSTER_API_TIMEOUT=a=b\n",
            encoding="utf-8",
        )

        assert settings_module.read_env_file(env_path) == {
            "ROSTER_API_URL": "http://quoted",
            "ROSTER_API_TIMEOUT": "a=b",
        }

    def test_read_missing_env_file_is_empty(self, tmp_path):
        assert settings_module.read_env_file(tmp_path / "absent.env") == {}
