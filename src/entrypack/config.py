"""
Run configuration for the entrypack converter.

Settings come from four layers, later layers winning:

    1. Defaults (the constants below)
    2. An optional YAML file (--config)
    3. Environment variables (ENTRYPACK_*)
    4. Command-line flags

Example YAML file:

    root_tag: JMdict
    entities_path: ../jmdict-enums/data/entities.json
    output_path: entrypack.json
    show_progress: false
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from entrypack.errors import ConfigError

# ==============================================================================
# Defaults
# ==============================================================================

DEFAULT_ROOT_TAG = "JMdict"
DEFAULT_ENTRY_TAG = "entry"
DEFAULT_ENTITIES_PATH = Path("entities.json")
DEFAULT_OUTPUT_PATH = Path("entrypack.json")
DEFAULT_BUFFER_SIZE = 64 * 1024
DEFAULT_PROGRESS_INTERVAL = 1000

# CI mode detection
CI_MODE = os.environ.get("CI") == "true"

ENV_ROOT_TAG = "ENTRYPACK_ROOT_TAG"
ENV_ENTITIES_PATH = "ENTRYPACK_ENTITIES_PATH"
ENV_OUTPUT_PATH = "ENTRYPACK_OUTPUT_PATH"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one conversion run."""

    root_tag: str = DEFAULT_ROOT_TAG
    entry_tag: str = DEFAULT_ENTRY_TAG
    entities_path: Path = DEFAULT_ENTITIES_PATH
    output_path: Path = DEFAULT_OUTPUT_PATH
    buffer_size: int = DEFAULT_BUFFER_SIZE
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    show_progress: bool = False

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw YAML/env value to the type of the named setting."""
    if name in ("entities_path", "output_path"):
        if not isinstance(value, (str, os.PathLike)):
            raise ConfigError(f"{name} must be a path, got {value!r}")
        return Path(value)
    if name in ("buffer_size", "progress_interval"):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        return value
    if name == "show_progress":
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false, got {value!r}")
        return value
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{name} must be a non-empty string, got {value!r}")
    return value


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file and validate its keys."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown settings: {', '.join(map(str, unknown))}")

    return {name: _coerce(name, value) for name, value in data.items()}


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Collect settings overridden through ENTRYPACK_* environment variables."""
    if environ is None:
        environ = os.environ

    overrides: dict[str, Any] = {}
    if environ.get(ENV_ROOT_TAG):
        overrides["root_tag"] = environ[ENV_ROOT_TAG]
    if environ.get(ENV_ENTITIES_PATH):
        overrides["entities_path"] = Path(environ[ENV_ENTITIES_PATH])
    if environ.get(ENV_OUTPUT_PATH):
        overrides["output_path"] = Path(environ[ENV_OUTPUT_PATH])
    return overrides


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **cli_overrides: Any,
) -> Settings:
    """Resolve settings from defaults, config file, environment and CLI flags."""
    settings = Settings(show_progress=sys.stderr.isatty() and not CI_MODE)

    if config_path is not None:
        settings = settings.with_overrides(**load_config_file(config_path))

    settings = settings.with_overrides(**env_overrides(environ))
    return settings.with_overrides(**cli_overrides)
