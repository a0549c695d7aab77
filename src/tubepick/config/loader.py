"""
Unified configuration loader with priority resolution.

Root directory (TUBEPICK_ROOT):
- macOS/Linux: ~/.tubepick
- Windows: %APPDATA%\\tubepick
- Override: TUBEPICK_ROOT environment variable

Setting priority (highest to lowest):
1. Environment variables (TUBEPICK_CLIENT, TUBEPICK_ALTERNATE_CLIENT)
2. Project config (.tubepick/config.yaml)
3. User config ({root_dir}/config.yaml)
4. Defaults (config/defaults.py)

Example config.yaml:

    primary_client: mobile
    alternate_client: web
    muxed_clients: [web, android]
    session_refresh_minutes: 15
    metadata_timeout: 30
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from tubepick.config.defaults import (
    DEFAULT_ALTERNATE_CLIENT,
    DEFAULT_MUXED_CLIENTS,
    DEFAULT_PRIMARY_CLIENT,
    METADATA_TIMEOUT,
    PROBE_TIMEOUT,
    SESSION_REFRESH_MINUTES,
)
from tubepick.exceptions import ConfigError

logger = logging.getLogger(__name__)


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class TubepickConfig:
    """Resolved tubepick configuration."""

    root_dir: Path
    primary_client: str
    alternate_client: str
    muxed_clients: tuple[str, ...]
    session_refresh_minutes: float
    metadata_timeout: int
    probe_timeout: int
    source: ConfigSource

    def alternate_for(self, client: str) -> str:
        """Client identity to retry with after a failure on ``client``."""
        if client == self.alternate_client:
            return self.primary_client
        return self.alternate_client


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .tubepick/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".tubepick" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the tubepick root directory.

    Priority:
    1. TUBEPICK_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\tubepick
       - macOS/Linux: ~/.tubepick
    """
    env_root = os.environ.get("TUBEPICK_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "tubepick"
        return Path.home() / "AppData" / "Roaming" / "tubepick"
    return Path.home() / ".tubepick"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _coerce_clients(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [v.strip() for v in value.split(",")]
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(v, str) and v for v in value
    ):
        raise ConfigError(f"'{key}' must be a list of client names, got {value!r}")
    return tuple(value)


def _coerce_number(value: Any, key: str, kind: type) -> Any:
    try:
        number = kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from e
    if number <= 0:
        raise ConfigError(f"'{key}' must be positive, got {value!r}")
    return number


def _resolve_config() -> TubepickConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        Resolved TubepickConfig. ``source`` records the highest-priority
        source that contributed at least one setting.

    Raises:
        ConfigError: If a configured value has the wrong type
    """
    root_dir = _get_root_dir()
    settings: dict[str, Any] = {}
    source = ConfigSource.DEFAULT

    # Lowest priority first so later sources overwrite
    user_config = _load_yaml_config(_get_user_config_path())
    if user_config:
        settings.update(user_config)
        source = ConfigSource.USER

    project_config_path = _find_project_config()
    if project_config_path:
        project_config = _load_yaml_config(project_config_path)
        if project_config:
            logger.info(f"Using project config {project_config_path}")
            settings.update(project_config)
            source = ConfigSource.PROJECT

    env_client = os.environ.get("TUBEPICK_CLIENT")
    if env_client:
        settings["primary_client"] = env_client
        source = ConfigSource.ENV
    env_alternate = os.environ.get("TUBEPICK_ALTERNATE_CLIENT")
    if env_alternate:
        settings["alternate_client"] = env_alternate
        source = ConfigSource.ENV

    primary = str(settings.get("primary_client", DEFAULT_PRIMARY_CLIENT))
    alternate = str(settings.get("alternate_client", DEFAULT_ALTERNATE_CLIENT))
    if primary == alternate:
        raise ConfigError(
            f"primary_client and alternate_client must differ (both {primary!r})"
        )

    config = TubepickConfig(
        root_dir=root_dir,
        primary_client=primary,
        alternate_client=alternate,
        muxed_clients=_coerce_clients(
            settings.get("muxed_clients", DEFAULT_MUXED_CLIENTS), "muxed_clients"
        ),
        session_refresh_minutes=_coerce_number(
            settings.get("session_refresh_minutes", SESSION_REFRESH_MINUTES),
            "session_refresh_minutes",
            float,
        ),
        metadata_timeout=_coerce_number(
            settings.get("metadata_timeout", METADATA_TIMEOUT), "metadata_timeout", int
        ),
        probe_timeout=_coerce_number(
            settings.get("probe_timeout", PROBE_TIMEOUT), "probe_timeout", int
        ),
        source=source,
    )
    logger.debug(f"Resolved config from {source.value}: {config}")
    return config


@lru_cache(maxsize=1)
def get_config() -> TubepickConfig:
    """Get resolved tubepick configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()
