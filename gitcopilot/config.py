"""Configuration management for git-copilot."""
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Set

import click
import tomli
import tomli_w
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "git-copilot"
DEFAULT_CONFIG_FILENAME = "config.toml"
CONFIG_DIR_ENV = "GIT_COPILOT_CONFIG_DIR"

ENV_MAPPING = {
    "GIT_COPILOT_API_KEY": "api_key",
    "GIT_COPILOT_MODEL": "model",
    "GIT_COPILOT_API_URL": "api_url",
    "GIT_COPILOT_REQUEST_TIMEOUT": "request_timeout",
    "GIT_COPILOT_LOG_FILE": "log_file",
}


def default_config_path() -> Path:
    """Location of the per-user config file.

    ``GIT_COPILOT_CONFIG_DIR`` overrides the platform app directory.
    """
    config_dir = os.environ.get(CONFIG_DIR_ENV) or click.get_app_dir(APP_NAME)
    return Path(config_dir) / DEFAULT_CONFIG_FILENAME


class Config(BaseModel):
    """Configuration settings for git-copilot.

    Values come from the config file, then ``GIT_COPILOT_*`` environment
    variables, then explicit keyword arguments (highest priority).
    """

    api_key: str = Field(
        default="",
        description="API key for the completion service"
    )

    model: str = Field(
        default="deepseek-chat",
        description="Model name sent with each completion request"
    )

    api_url: str = Field(
        default="https://api.deepseek.com/v1/chat/completions",
        description="Chat-completions endpoint"
    )

    request_timeout: Optional[float] = Field(
        default=None,
        description="Seconds to wait for the completion service (no limit when unset)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="File that records created commits"
    )

    # Fields filled from GIT_COPILOT_* variables or read from the config file
    _env_fields: Set[str] = PrivateAttr(default_factory=set)
    _file_fields: Set[str] = PrivateAttr(default_factory=set)

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and surrounding whitespace."""
        if not value:
            return value
        return re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value).strip()

    def __init__(self, **data):
        env_data = {}
        env_vars = {}

        for env_var, field_name in ENV_MAPPING.items():
            if env_var in os.environ:
                env_data[field_name] = self._sanitize_string(os.environ[env_var])
                env_vars[field_name] = env_var

        merged_data = {**env_data, **data}
        env_fields = set(env_data) - set(data)

        try:
            super().__init__(**merged_data)
        except ValidationError as e:
            bad = sorted({
                env_vars[error["loc"][0]]
                for error in e.errors()
                if error["loc"] and error["loc"][0] in env_fields
            })
            if bad:
                raise ConfigurationError(
                    f"Invalid value in environment variable {', '.join(bad)}"
                ) from e
            raise

        self._env_fields = env_fields

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from the config file.

        Args:
            config_path: Config file to read, defaults to ``default_config_path()``

        Returns:
            Config: Configuration object with values from file or defaults

        Raises:
            ConfigurationError: A GIT_COPILOT_* variable holds an invalid value
        """
        config_path = config_path or default_config_path()

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)
            config = cls(**config_data)
        except (OSError, tomli.TOMLDecodeError, ValidationError) as e:
            logger.warning("Error reading config file %s: %s", config_path, e)
            return cls()

        config._file_fields = set(config_data) & set(cls.model_fields)
        return config

    def field_source(self, name: str) -> str:
        """Where the value of ``name`` came from: config, env or default."""
        if name in self._file_fields:
            return "config"
        if name in self._env_fields:
            return "env"
        return "default"

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Write the configuration, leaving out unset values.

        Values taken from GIT_COPILOT_* variables are not written.

        Returns:
            Path: The file that was written
        """
        config_path = config_path or default_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = {
            k: v
            for k, v in self.model_dump(exclude=self._env_fields).items()
            if v is not None
        }
        with config_path.open('wb') as f:
            tomli_w.dump(config_dict, f)
        return config_path

    def set_value(self, key: str, value: str) -> None:
        """Set a single configuration item from its string form.

        Raises:
            ConfigurationError: Unknown key or a value that does not validate
        """
        if key not in type(self).model_fields:
            known = ", ".join(type(self).model_fields)
            raise ConfigurationError(f"Unknown configuration key '{key}' (known keys: {known})")

        value = self._sanitize_string(value)
        data: Dict[str, Any] = self.model_dump()
        data[key] = value if value or key in ('api_key', 'model', 'api_url') else None

        try:
            validated = type(self).model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for '{key}': {value}") from e

        setattr(self, key, getattr(validated, key))
        self._env_fields.discard(key)
        self._file_fields.add(key)

    def get_log_file(self) -> Optional[Path]:
        """Path of the commit log file, or None when logging to file is disabled."""
        if self.log_file:
            return Path(self.log_file).expanduser()
        return None
