"""Path utilities for locating the user's home, cache and config directories.

Provides functions to:
- Resolve the home directory, failing with a precondition error
- Resolve the cache directory and cache file (MK_CACHE_DIR or ~/.cache/mewo_mk)
- Resolve the user config file (MK_CONFIG or ~/.config/mewo_mk/config.yaml)
- Resolve the current project directory
"""

import os
from pathlib import Path

from mewo_mk.constants import (
    APP_DIR,
    CACHE_FILE_NAME,
    USER_CONFIG_FILE_NAME,
    EnvVar,
)
from mewo_mk.primitives.errors import PreconditionError


def get_home_dir() -> Path:
    """Get the user's home directory.

    Raises:
        PreconditionError: If the home directory cannot be determined.
    """
    try:
        return Path.home()
    except (KeyError, RuntimeError) as e:
        raise PreconditionError("Cannot read home dir.", cause=e)


def get_cache_dir() -> Path:
    """Get cache directory from env var or default to ~/.cache/mewo_mk."""
    cache_dir = os.getenv(EnvVar.CACHE_DIR)
    if cache_dir:
        return Path(cache_dir).expanduser()
    return get_home_dir() / ".cache" / APP_DIR


def get_cache_file() -> Path:
    return get_cache_dir() / CACHE_FILE_NAME


def get_user_config_file() -> Path:
    """Get user config file from env var or default to ~/.config/mewo_mk/config.yaml."""
    config_file = os.getenv(EnvVar.CONFIG)
    if config_file:
        return Path(config_file).expanduser()
    return get_home_dir() / ".config" / APP_DIR / USER_CONFIG_FILE_NAME


def get_project_dir() -> Path:
    """Get the current working directory as an absolute path.

    Raises:
        PreconditionError: If the working directory cannot be read.
    """
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise PreconditionError("Cannot read the current dir.", cause=e)
