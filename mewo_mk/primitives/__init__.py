"""mk primitives: stateless execution and storage units."""

from mewo_mk.primitives.cache_store import CacheEntry, CacheStore
from mewo_mk.primitives.errors import (
    CacheError,
    ConfigurationError,
    LaunchError,
    MkError,
    PreconditionError,
    ResolutionError,
)
from mewo_mk.primitives.subprocess import SubprocessPrimitive, SubprocessResult

__all__ = [
    # Errors
    "MkError",
    "PreconditionError",
    "CacheError",
    "ResolutionError",
    "LaunchError",
    "ConfigurationError",
    # Cache
    "CacheEntry",
    "CacheStore",
    # Subprocess
    "SubprocessResult",
    "SubprocessPrimitive",
]
