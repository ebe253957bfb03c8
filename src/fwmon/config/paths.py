"""Where fwmon looks for its config file, record store and reference file."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "fwmon"
CONFIG_FILENAME = "config.toml"
REFERENCE_FILENAME = "reference.csv"

DATA_DIR_ENV_VAR = "FWMON_DATA_DIR"


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    return Path(value) if value else fallback


def default_config_path() -> Path:
    base = _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config")
    return base / APP_NAME / CONFIG_FILENAME


def default_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return expand_path(override)
    base = _xdg_dir("XDG_DATA_HOME", Path.home() / ".local" / "share")
    return base / APP_NAME


def default_reference_path() -> Path:
    # the reference export lives next to the record store unless configured
    return default_data_dir() / REFERENCE_FILENAME


def expand_path(value: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(value)))
