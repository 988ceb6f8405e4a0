"""mk runtime services."""

from mewo_mk.runtime.env_resolver import EnvResolver
from mewo_mk.runtime.launcher import Launcher, build_env

__all__ = [
    "EnvResolver",
    "Launcher",
    "build_env",
]
