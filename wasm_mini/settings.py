"""User settings loaded from config file and environment."""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

CONFIG_DIR_NAME = ".wasm-mini"
CONFIG_FILE_NAME = "config.ini"

ENV_VERBOSE = "WASM_MINI_VERBOSE"
ENV_WARN_EXTENSION = "WASM_MINI_WARN_EXTENSION"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Settings:
    verbose: bool = False
    warn_extension: bool = True


def get_config_path() -> Path:
    """Return the path of the user config file (it may not exist)."""
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name, "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """Load settings.

    Precedence: environment > config file > defaults. An unreadable or
    malformed config file falls back to defaults.
    """
    settings = Settings()
    config_file = config_file or get_config_path()

    if config_file.exists():
        config = configparser.ConfigParser()
        try:
            config.read(config_file)
            settings.verbose = config.getboolean("output", "verbose", fallback=settings.verbose)
            settings.warn_extension = config.getboolean("files", "warn_extension", fallback=settings.warn_extension)
        except (configparser.Error, ValueError):
            settings = Settings()

    verbose = _env_flag(ENV_VERBOSE)
    if verbose is not None:
        settings.verbose = verbose
    warn_extension = _env_flag(ENV_WARN_EXTENSION)
    if warn_extension is not None:
        settings.warn_extension = warn_extension

    return settings
