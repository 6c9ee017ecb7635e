"""Tests for configuration — env-driven settings and the login file."""

from __future__ import annotations

from pathlib import Path

import pytest

from rightst.config import DEFAULT_CONFIG_FILE, Credentials, RightstConfig
from rightst.core.errors import ConfigError

LOGIN_FILE = """\
login:
  default_account: prod
  accounts:
    prod:
      id: 1234
      host: us-3.rightscale.com
      refresh_token: prod-token
    staging:
      id: 5678
      host: https://us-4.rightscale.com/
      refresh_token: staging-token
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in ("ACCOUNT", "HOST", "REFRESH_TOKEN", "ENVIRONMENT", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(f"RIGHT_ST_{var}", raising=False)
    monkeypatch.chdir(tmp_path)  # keep any developer .env out of the way


@pytest.fixture
def login_file(tmp_path: Path) -> Path:
    path = tmp_path / "right_st.yml"
    path.write_text(LOGIN_FILE, encoding="utf-8")
    return path


class TestRightstConfig:
    def test_defaults(self):
        config = RightstConfig()
        assert config.config_file == DEFAULT_CONFIG_FILE
        assert config.log_level == "INFO"
        assert config.request_timeout == 300.0
        assert config.debug is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RIGHT_ST_LOG_LEVEL", "warning")
        monkeypatch.setenv("RIGHT_ST_REQUEST_TIMEOUT", "30")
        config = RightstConfig()
        assert config.effective_log_level == "WARNING"
        assert config.request_timeout == 30.0

    def test_debug_forces_debug_level(self):
        assert RightstConfig(debug=True).effective_log_level == "DEBUG"


class TestCredentials:
    def test_default_account_from_file(self, login_file: Path):
        creds = RightstConfig(config_file=login_file).credentials()
        assert creds == Credentials(
            account="1234", host="us-3.rightscale.com", refresh_token="prod-token"
        )
        assert creds.base_url == "https://us-3.rightscale.com"

    def test_named_environment(self, login_file: Path):
        creds = RightstConfig(config_file=login_file, environment="staging").credentials()
        assert creds.account == "5678"
        assert creds.base_url == "https://us-4.rightscale.com"

    def test_explicit_values_win(self, login_file: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RIGHT_ST_REFRESH_TOKEN", "from-env")
        creds = RightstConfig(config_file=login_file).credentials()
        assert creds.refresh_token == "from-env"
        assert creds.account == "1234"

    def test_fully_explicit_needs_no_file(self, tmp_path: Path):
        creds = RightstConfig(
            config_file=tmp_path / "absent.yml", account="1", host="h", refresh_token="t"
        ).credentials()
        assert creds.account == "1"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="reading config file"):
            RightstConfig(config_file=tmp_path / "absent.yml").credentials()

    def test_unknown_environment(self, login_file: Path):
        with pytest.raises(ConfigError, match="Unknown environment 'qa'"):
            RightstConfig(config_file=login_file, environment="qa").credentials()

    def test_incomplete_account(self, tmp_path: Path):
        path = tmp_path / "partial.yml"
        path.write_text(
            "login:\n  default_account: a\n  accounts:\n    a:\n      id: 1\n      host: h\n",
            encoding="utf-8",
        )
        with pytest.raises(ConfigError, match="Invalid config file"):
            RightstConfig(config_file=path).credentials()
