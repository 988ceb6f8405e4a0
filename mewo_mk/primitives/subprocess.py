"""Subprocess execution primitive.

Synchronous and without timeouts: every call waits for the process to exit.
A process that cannot be started is reported in the result, not raised.
"""

import signal
import subprocess
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional

# Shell convention for "command not found".
NOT_FOUND_RETURN_CODE = 127


@dataclass
class SubprocessResult:
    """Result of subprocess execution.

    Attributes:
        success: True if return code is 0.
        stdout: Standard output from process (empty in foreground mode).
        stderr: Standard error from process (empty in foreground mode).
        return_code: Exit code from process.
        duration_ms: Time taken for execution in milliseconds.
        error: OS error message if the process could not be started.
    """

    success: bool
    stdout: str
    stderr: str
    return_code: int
    duration_ms: float
    error: Optional[str] = None

    @property
    def started(self) -> bool:
        return self.error is None


class SubprocessPrimitive:
    """Runs external commands for discovery probes and the final launch."""

    def execute(
        self,
        command: List[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> SubprocessResult:
        """Run a command and capture its output.

        Args:
            command: Argument vector; command[0] is looked up on PATH.
            cwd: Working directory (default: inherited).
            env: Full process environment (default: inherited).

        Returns:
            SubprocessResult with decoded stdout and stderr.
        """
        start_time = time.time()

        if not command:
            return self._failed("No command specified", start_time)

        try:
            proc = subprocess.run(
                command,
                cwd=cwd,
                env=env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
            )
        except (OSError, ValueError) as e:
            return self._failed(str(e), start_time)

        return SubprocessResult(
            success=proc.returncode == 0,
            stdout=proc.stdout.decode("utf-8", errors="replace"),
            stderr=proc.stderr.decode("utf-8", errors="replace"),
            return_code=proc.returncode,
            duration_ms=(time.time() - start_time) * 1000,
        )

    def run_foreground(
        self,
        command: List[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> SubprocessResult:
        """Run a command attached to the caller's standard streams.

        Blocks until the child exits. stdout and stderr are not captured.
        SIGINT is ignored while waiting: the child shares the terminal and
        receives Ctrl-C itself, and its exit status is what gets returned.
        """
        start_time = time.time()

        if not command:
            return self._failed("No command specified", start_time)

        try:
            proc = subprocess.Popen(command, cwd=cwd, env=env)
        except (OSError, ValueError) as e:
            return self._failed(str(e), start_time)

        with sigint_ignored():
            return_code = proc.wait()

        return SubprocessResult(
            success=return_code == 0,
            stdout="",
            stderr="",
            return_code=return_code,
            duration_ms=(time.time() - start_time) * 1000,
        )

    def _failed(self, error: str, start_time: float) -> SubprocessResult:
        return SubprocessResult(
            success=False,
            stdout="",
            stderr=error,
            return_code=NOT_FOUND_RETURN_CODE,
            duration_ms=(time.time() - start_time) * 1000,
            error=error,
        )


@contextmanager
def sigint_ignored():
    """Ignore SIGINT in this process, restoring the previous handler on exit.

    Signal handlers can only be changed from the main thread; elsewhere this
    is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, signal.SIG_DFL if previous is None else previous)
