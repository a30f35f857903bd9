"""Configuration loading and persistence.

Settings come from environment variables, a local ``.env`` file and the
user config file (``~/.quickynab/config`` unless ``QUICKYNAB_CONFIG`` points
elsewhere). Environment variables take precedence over both files, and the
user config file takes precedence over ``.env``.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from quickynab.domain.errors import ConfigError, missing_access_token

CONFIG_FILE_MODE = 0o600
LOCAL_ENV_FILE = ".env"


def default_config_path() -> Path:
    """Return the user config file path."""
    override = os.environ.get("QUICKYNAB_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".quickynab" / "config"


class Settings(BaseSettings):
    ynab_access_token: str = ""
    ynab_budget_id: Optional[str] = None
    ynab_account_id: Optional[str] = None
    ynab_api_base: str = "https://api.ynab.com/v1"
    api_timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def budget_id(self) -> Optional[str]:
        return self.ynab_budget_id or None

    @property
    def account_id(self) -> Optional[str]:
        return self.ynab_account_id or None


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from the environment and config files.

    Args:
        config_path: User config file. Defaults to ``default_config_path()``.
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    return Settings(_env_file=(LOCAL_ENV_FILE, str(path)))


def require_access_token(settings: Settings) -> str:
    """Return the access token.

    Raises:
        ConfigError: If no token is configured
    """
    token = settings.ynab_access_token.strip()
    if not token:
        raise ConfigError(missing_access_token())
    return token


def has_config(config_path: Optional[Path] = None) -> bool:
    """Return True if a user config file or local ``.env`` exists."""
    path = Path(config_path) if config_path is not None else default_config_path()
    return path.exists() or Path(LOCAL_ENV_FILE).exists()


def save_config(values: Mapping[str, str], config_path: Optional[Path] = None) -> Path:
    """Write ``KEY=VALUE`` lines to the user config file, readable by the owner only.

    Returns:
        Path of the written file
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = "".join(f"{key}={value}\n" for key, value in values.items())
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    os.chmod(path, CONFIG_FILE_MODE)
    return path
