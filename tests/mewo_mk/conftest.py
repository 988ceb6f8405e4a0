"""Shared fixtures for mk tests."""

import os
import tempfile
from typing import Dict, List, Optional

# Keep log files out of the real ~/.cache while test modules are imported.
os.environ.setdefault("MK_CACHE_DIR", tempfile.mkdtemp(prefix="mk-test-cache-"))

import pytest

from mewo_mk.primitives.subprocess import SubprocessResult


@pytest.fixture(autouse=True)
def _isolate_user_dirs(tmp_path, monkeypatch):
    """Point cache and config lookups at a temporary directory."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("MK_CACHE_DIR", str(cache_dir))
    monkeypatch.setenv("MK_CONFIG", str(tmp_path / "user-config.yaml"))
    monkeypatch.delenv("MK_DEBUG", raising=False)
    yield cache_dir


def make_venv(root, name: str = ".venv") -> str:
    """Create a directory that looks like a virtual environment."""
    bin_dir = root / name / "bin"
    bin_dir.mkdir(parents=True)
    python = bin_dir / "python"
    python.write_text("#!/bin/sh\n")
    python.chmod(0o755)
    return str(root / name)


def ok(stdout: str) -> SubprocessResult:
    return SubprocessResult(
        success=True, stdout=stdout, stderr="", return_code=0, duration_ms=1.0
    )


def failed(return_code: int = 1, stderr: str = "") -> SubprocessResult:
    return SubprocessResult(
        success=False, stdout="", stderr=stderr, return_code=return_code, duration_ms=1.0
    )


def not_installed(name: str) -> SubprocessResult:
    error = f"[Errno 2] No such file or directory: '{name}'"
    return SubprocessResult(
        success=False,
        stdout="",
        stderr=error,
        return_code=127,
        duration_ms=1.0,
        error=error,
    )


class FakeSubprocess:
    """Stands in for SubprocessPrimitive, answering by command[0]."""

    def __init__(self, responses: Optional[Dict[str, SubprocessResult]] = None):
        self.responses = responses or {}
        self.calls: List[List[str]] = []
        self.cwds: List[Optional[str]] = []
        self.envs: List[Optional[Dict[str, str]]] = []

    def execute(self, command, cwd=None, env=None):
        self.calls.append(list(command))
        self.cwds.append(cwd)
        self.envs.append(env)
        if command[0] not in self.responses:
            return not_installed(command[0])
        return self.responses[command[0]]

    def run_foreground(self, command, cwd=None, env=None):
        return self.execute(command, cwd=cwd, env=env)

    @property
    def programs(self) -> List[str]:
        return [call[0] for call in self.calls]
