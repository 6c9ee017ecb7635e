"""Configuration — env-driven settings plus the YAML login file.

Settings come from ``RIGHT_ST_*`` environment variables or a ``.env`` file.
Credentials come from the login file (``~/.right_st.yml`` by default)::

    login:
      default_account: production
      accounts:
        production:
          id: 12345
          host: us-3.rightscale.com
          refresh_token: abc...

Explicit ``RIGHT_ST_ACCOUNT`` / ``RIGHT_ST_HOST`` / ``RIGHT_ST_REFRESH_TOKEN``
values win over the file.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rightst.core.errors import ConfigError

DEFAULT_CONFIG_FILE = Path("~/.right_st.yml")


class LoginAccount(BaseModel):
    """One named account entry in the login file."""

    model_config = ConfigDict(frozen=True)

    id: str
    host: str
    refresh_token: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class LoginFile(BaseModel):
    """The ``login`` section of the login file."""

    model_config = ConfigDict(frozen=True)

    default_account: str = ""
    accounts: dict[str, LoginAccount] = Field(default_factory=dict)


class Credentials(BaseModel):
    """Resolved endpoint and credentials handed to the gateway."""

    model_config = ConfigDict(frozen=True)

    account: str
    host: str
    refresh_token: str

    @property
    def base_url(self) -> str:
        """Host with an ``https://`` scheme unless one was given."""
        host = self.host.rstrip("/")
        if "://" not in host:
            host = f"https://{host}"
        return host


class RightstConfig(BaseSettings):
    """Process configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export RIGHT_ST_ENVIRONMENT=staging
        export RIGHT_ST_LOG_LEVEL=DEBUG
        export RIGHT_ST_REQUEST_TIMEOUT=60
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RIGHT_ST_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials (override the login file)
    account: str = ""
    host: str = ""
    refresh_token: str = ""

    # Login file and the account to pick from it
    config_file: Path = DEFAULT_CONFIG_FILE
    environment: str = ""

    # Runtime
    log_level: str = "INFO"
    debug: bool = False
    request_timeout: float = 300.0

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    def load_login_file(self) -> LoginFile:
        """Read and validate the login file."""
        path = self.config_file.expanduser()
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise ConfigError(f"Error reading config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Error parsing config file {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        try:
            return LoginFile.model_validate(raw.get("login") or {})
        except ValidationError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    def credentials(self) -> Credentials:
        """Resolve credentials from explicit settings and the login file.

        The login file is only read when a credential is not set explicitly.
        """
        account, host, token = self.account, self.host, self.refresh_token
        if not (account and host and token):
            login = self.load_login_file()
            name = self.environment or login.default_account
            if not name:
                raise ConfigError("No environment given and no default_account configured")
            entry = login.accounts.get(name)
            if entry is None:
                raise ConfigError(f"Unknown environment '{name}' in {self.config_file}")
            account = account or entry.id
            host = host or entry.host
            token = token or entry.refresh_token

        missing = [
            field
            for field, value in (("account", account), ("host", host), ("refresh_token", token))
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing credentials: {', '.join(missing)}")
        return Credentials(account=account, host=host, refresh_token=token)
