# src/kanbanctl/config.py

"""
Runtime configuration.

Resolution order for the data directory:
1. explicit `--home` option,
2. KANBANCTL_HOME environment variable,
3. ~/.kanbanctl

An optional `config.yaml` inside the data directory may set:

    log_level: INFO
    color: false
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Final, Mapping, Optional

import yaml


HOME_ENV: Final[str] = "KANBANCTL_HOME"
DEFAULT_HOME: Final[Path] = Path.home() / ".kanbanctl"
CONFIG_FILE: Final[str] = "config.yaml"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def resolve_home(explicit: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    if explicit:
        return Path(explicit).expanduser()
    from_env = (env.get(HOME_ENV) or "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return DEFAULT_HOME


def load_config(home: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        home: Data directory.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = home / CONFIG_FILE
    if not path.exists():
        return {}, None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except yaml.YAMLError as exc:
        return {}, f"{path.name}: YAMLError: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"{path.name}: expected mapping, got {type(data).__name__}"
    return data, None


def get_log_level(config: dict[str, Any]) -> str | None:
    """Return the configured log level if it names a known level."""
    raw = config.get("log_level")
    if isinstance(raw, str) and raw.strip().upper() in VALID_LOG_LEVELS:
        return raw.strip().upper()
    return None


def get_color(config: dict[str, Any]) -> bool:
    raw = config.get("color")
    return raw if isinstance(raw, bool) else True
