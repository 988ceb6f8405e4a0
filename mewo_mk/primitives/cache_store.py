"""Environment cache I/O.

Append-only record store mapping a project directory to the environment
path resolved for it. One record per line: ``<directory> <environment_path>``.
Records are never rewritten or compacted; the last record for a directory wins.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from mewo_mk.primitives.errors import CacheError

RECORD_SEPARATOR = " "

# Directory names that are not valid UTF-8 arrive from os.getcwd() with
# surrogate escapes; write and read them back as the original bytes.
FILE_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class CacheEntry:
    """One cache record.

    Attributes:
        directory: Absolute project directory.
        environment_path: Environment root resolved for the directory.
    """

    directory: str
    environment_path: str

    def to_line(self) -> str:
        return f"{self.directory}{RECORD_SEPARATOR}{self.environment_path}"


class CacheStore:
    """Handle on the persisted cache file.

    Pure I/O with an explicit path. The file is opened and closed around
    every read and every append; nothing is held between calls.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self, directory: str) -> Optional[str]:
        """Return the environment path most recently recorded for a directory.

        Args:
            directory: Absolute project directory.

        Returns:
            The environment path from the last matching record, or None if
            the cache file is absent or holds no record for the directory.

        Raises:
            CacheError: If the cache file exists but cannot be read.
        """
        prefix = f"{directory}{RECORD_SEPARATOR}"
        environment_path = None

        for line in self._read_lines():
            if not line.startswith(prefix):
                continue
            candidate = line[len(prefix):].strip()
            if candidate:
                environment_path = candidate

        return environment_path

    def entries(self) -> List[CacheEntry]:
        """Return every well-formed record in file order."""
        result = []
        for line in self._read_lines():
            directory, sep, environment_path = line.partition(RECORD_SEPARATOR)
            if sep and directory and environment_path.strip():
                result.append(CacheEntry(directory, environment_path.strip()))
        return result

    def append(self, directory: str, environment_path: str) -> CacheEntry:
        """Append a record, creating the file and its directory if needed.

        Args:
            directory: Absolute project directory.
            environment_path: Environment root to record.

        Returns:
            The entry that was written.

        Raises:
            CacheError: If the directory or file cannot be created or written.
        """
        entry = CacheEntry(directory, environment_path)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(
                f"Failed to create cache directory {self.path.parent}: {e}",
                path=str(self.path),
                cause=e,
            )

        try:
            with open(self.path, "a", encoding="utf-8", errors=FILE_ERRORS) as f:
                f.write(entry.to_line() + "\n")
        except OSError as e:
            raise CacheError(
                f"Couldn't open or write cache file {self.path}: {e}",
                path=str(self.path),
                cause=e,
            )

        return entry

    def exists(self) -> bool:
        return self.path.exists()

    def _read_lines(self) -> List[str]:
        try:
            with open(self.path, encoding="utf-8", errors=FILE_ERRORS) as f:
                return [line.rstrip("\r\n") for line in f]
        except FileNotFoundError:
            return []
        except OSError as e:
            raise CacheError(
                f"Unable to read cache file {self.path}: {e}",
                path=str(self.path),
                cause=e,
            )
