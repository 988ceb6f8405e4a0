"""mk utilities."""

from mewo_mk.utils.logger import get_logger
from mewo_mk.utils.path_utils import (
    get_cache_dir,
    get_cache_file,
    get_home_dir,
    get_project_dir,
    get_user_config_file,
)

__all__ = [
    "get_logger",
    "get_cache_dir",
    "get_cache_file",
    "get_home_dir",
    "get_project_dir",
    "get_user_config_file",
]
