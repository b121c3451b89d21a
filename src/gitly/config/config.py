import ipaddress
import os
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field, field_validator

from gitly.config.constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE


# =============================================================================
#   LogConfig
# =============================================================================
class LogConfig(BaseModel):
    """Logging configuration."""

    log_level: str
    file_log_level: str
    file_log_dir: str
    file_log_max_files: int
    file_log_file_size_mb: int

    @field_validator("log_level", "file_log_level")
    def check_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Unrecognized log level: {v}")
        return v.upper()

    @property
    def resolved_log_dir(self) -> Path:
        """Return absolute path to the log directory, creating it if needed.

        Relative paths are taken from the working directory the service runs in.
        """
        p = Path(self.file_log_dir)
        if not p.is_absolute():
            p = (Path.cwd() / p).resolve()
        p.mkdir(parents=True, exist_ok=True)
        return p


# =============================================================================
#   ServerConfig
# =============================================================================
class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str
    port: int = Field(gt=0, le=65535)

    @field_validator("host")
    def check_host(cls, v: str) -> str:
        try:
            ipaddress.ip_address(v)
        except ValueError as exc:
            raise ValueError("host must be a valid IP address") from exc
        return v


# =============================================================================
#   AppConfig
# =============================================================================
class AppConfig(BaseModel):
    """Service identity and runtime flags.

    ``debug`` gates stack-trace inclusion in 500 responses. It can be
    overridden at startup through the APP_DEBUG environment variable.
    """

    name: str = "Gitly API"
    version: str = "1.0.0"
    debug: bool = False

    @field_validator("name", "version")
    def check_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Service name and version cannot be empty")
        return v


# =============================================================================
#   Config  (root)
# =============================================================================
class Config(BaseModel):
    """Root application configuration loaded from config.yml."""

    server: ServerConfig
    logging: LogConfig
    app: AppConfig = AppConfig()

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> "Config":
        """Load and validate configuration from a YAML file.

        Args:
            file_path: Path to config.yml.

        Returns:
            Validated Config instance.
        """
        file_path = Path(file_path)

        if not file_path.exists() or not file_path.is_file():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, "r") as fh:
            raw = yaml.safe_load(fh)

        return cls(**raw)


# =============================================================================
#   Environment overrides
# =============================================================================
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def get_bool_env(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment, falling back to ``default``.

    Raises:
        ValueError: If the variable is set to something that is not a boolean.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got '{raw}'")


def resolve_config_file() -> Path:
    """Config file to load: $GITLY_CONFIG_FILE if set, else the packaged default."""
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_FILE
