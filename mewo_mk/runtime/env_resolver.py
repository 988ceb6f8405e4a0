"""Environment resolver service.

Finds the virtual environment belonging to a project directory.

Resolution order:
    1. Cache store lookup (last record for the directory wins)
    2. Liveness check: <environment>/bin/python must exist
    3. Fallback chain of discovery tools, first success wins
    4. Record the discovered path in the cache store

Every tool but the last is optional: a non-zero exit, a missing binary or
empty output moves on to the next tool. The last tool is authoritative and
its failure ends resolution. Locates environments only, never creates one.
"""

import os
from typing import List, Optional

from mewo_mk.config import ToolDescriptor
from mewo_mk.constants import NO_VENV_HINT
from mewo_mk.primitives.cache_store import CacheStore
from mewo_mk.primitives.errors import ResolutionError
from mewo_mk.primitives.subprocess import SubprocessPrimitive
from mewo_mk.utils.logger import get_logger

logger = get_logger(__name__)


def python_bin(environment_path: str) -> str:
    return os.path.join(environment_path, "bin", "python")


def is_live(environment_path: str) -> bool:
    """True if the environment still has a bin/python."""
    return os.path.exists(python_bin(environment_path))


class EnvResolver:
    """Resolves a project directory to its environment path."""

    def __init__(
        self,
        cache: CacheStore,
        tools: List[ToolDescriptor],
        subprocess: Optional[SubprocessPrimitive] = None,
    ):
        """Initialize resolver.

        Args:
            cache: Cache store handle shared across invocations.
            tools: Fallback chain in priority order; must not be empty.
            subprocess: Runner for discovery tools.
        """
        if not tools:
            raise ValueError("EnvResolver needs at least one discovery tool")
        self.cache = cache
        self.tools = list(tools)
        self.subprocess = subprocess or SubprocessPrimitive()

    def resolve(self, directory: str) -> str:
        """Return a usable environment path for directory.

        Raises:
            ResolutionError: If the authoritative tool finds nothing.
            CacheError: If the cache cannot be read or written.
        """
        directory = str(directory)

        cached = self.cache.load(directory)
        if cached:
            if is_live(cached):
                logger.debug("Cache hit for %s: %s", directory, cached)
                return cached
            logger.info(
                "Cached environment %s for %s has no bin/python, re-resolving",
                cached,
                directory,
            )

        environment_path = self._discover(directory)
        self.cache.append(directory, environment_path)
        logger.info("Cached environment %s for %s", environment_path, directory)
        return environment_path

    def _discover(self, directory: str) -> str:
        *optional, authoritative = self.tools

        for tool in optional:
            path = self._try_tool(tool, directory)
            if path:
                return path

        return self._run_authoritative(authoritative, directory)

    def _try_tool(self, tool: ToolDescriptor, directory: str) -> Optional[str]:
        logger.debug("Trying %s: %s", tool.name, tool.display)
        result = self.subprocess.execute(tool.command, cwd=directory)

        if not result.started:
            logger.debug("%s unavailable: %s", tool.name, result.error)
            return None
        if not result.success:
            logger.debug("%s returned %d", tool.name, result.return_code)
            return None

        path = tool.parse_output(result.stdout)
        if not path:
            logger.debug("%s printed no environment path", tool.name)
            return None

        logger.debug("%s found %s", tool.name, path)
        return path

    def _run_authoritative(self, tool: ToolDescriptor, directory: str) -> str:
        logger.debug("Falling back to %s: %s", tool.name, tool.display)
        result = self.subprocess.execute(tool.command, cwd=directory)

        if not result.started:
            raise ResolutionError(
                f"Failed to execute '{tool.display}': {result.error}",
                tool=tool.name,
            )
        if not result.success:
            raise ResolutionError(
                f"Command '{tool.display}' returned exit status "
                f"{result.return_code}. {NO_VENV_HINT}",
                tool=tool.name,
                return_code=result.return_code,
            )

        path = tool.parse_output(result.stdout)
        if not path:
            raise ResolutionError(
                "No venv found for current working directory.",
                tool=tool.name,
                return_code=result.return_code,
            )

        logger.debug("%s found %s", tool.name, path)
        return path
