"""
Configuration module for the Signal MCP server.

Handles settings loading, path resolution, and logging setup.

Settings come from an optional JSON file (default: config/mcp_server.json)
and SIGNAL_MCP__* environment variables, which take precedence. They are
loaded once at startup and passed explicitly to the components that need
them.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "mcp_server.json"
DEFAULT_SIGNAL_CLI_PATH = "/usr/bin/signal-cli"
DEFAULT_STORAGE = "./var"

CONFIG_PATH_ENV = "SIGNAL_MCP_CONFIG"
LOG_LEVEL_ENV = "SIGNAL_MCP_LOG_LEVEL"
ENV_PREFIX = "SIGNAL_MCP__"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

SETTING_KEYS = ("account", "signal_cli_path", "storage")


class ConfigError(Exception):
    """Raised when settings cannot be loaded or are incomplete."""


@dataclass(frozen=True)
class Settings:
    """Immutable server settings."""

    account: str
    signal_cli_path: Path = Path(DEFAULT_SIGNAL_CLI_PATH)
    storage: Path = Path(DEFAULT_STORAGE)


def resolve_path(path_str: str) -> Path:
    """
    Resolve a config path, expanding a leading ~.

    Relative paths are kept relative to the working directory.

    Args:
        path_str: Path string from configuration

    Returns:
        Path object
    """
    if path_str.startswith("~"):
        return Path(path_str).expanduser()
    return Path(path_str)


def _read_config_file(config_path: Path, required: bool) -> dict:
    """Load the JSON config file, or return {} if it is optional and absent."""
    if not config_path.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug(f"No config file at {config_path}, using environment only")
        return {}

    try:
        with open(config_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")

    return data


def _env_overrides(environ: Mapping[str, str]) -> dict:
    """Collect SIGNAL_MCP__<KEY> variables as lower-case setting keys."""
    overrides = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        key = name[len(ENV_PREFIX):].lower()
        if key in SETTING_KEYS:
            overrides[key] = value
    return overrides


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the config file and environment.

    Args:
        config_path: Explicit JSON config path. When given, the file must exist.
            Otherwise SIGNAL_MCP_CONFIG or config/mcp_server.json is tried.
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigError: If the file is unreadable or `account` is missing
    """
    if environ is None:
        environ = os.environ

    required = config_path is not None
    if config_path is None and environ.get(CONFIG_PATH_ENV):
        config_path = Path(environ[CONFIG_PATH_ENV])
        required = True
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    values = _read_config_file(Path(config_path), required)
    values.update(_env_overrides(environ))

    account = values.get("account")
    if not isinstance(account, str) or not account.strip():
        raise ConfigError(
            "Missing required setting 'account' "
            f"(set it in {config_path} or {ENV_PREFIX}ACCOUNT)"
        )

    settings = Settings(
        account=account.strip(),
        signal_cli_path=resolve_path(str(values.get("signal_cli_path", DEFAULT_SIGNAL_CLI_PATH))),
        storage=resolve_path(str(values.get("storage", DEFAULT_STORAGE))),
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings


def setup_logging(level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """
    Configure root logging once at startup.

    Logs go to stderr because stdout carries the MCP protocol. When `log_dir`
    is given, a file handler writing mcp_server.log is added as well.

    Args:
        level: Level name; falls back to SIGNAL_MCP_LOG_LEVEL, then INFO
        log_dir: Optional directory for the log file (created if missing)
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / 'mcp_server.log'))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
