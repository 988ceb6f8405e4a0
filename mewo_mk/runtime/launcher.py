"""Runs the project script under the resolved interpreter."""

import os
from typing import Dict, List, Mapping, Optional

from mewo_mk.constants import EnvVar
from mewo_mk.primitives.errors import LaunchError, PreconditionError
from mewo_mk.primitives.subprocess import SubprocessPrimitive
from mewo_mk.runtime.env_resolver import python_bin
from mewo_mk.utils.logger import get_logger

logger = get_logger(__name__)


def build_env(environment_path: str, base_env: Mapping[str, str]) -> Dict[str, str]:
    """Copy base_env with <environment>/bin prepended to PATH.

    The bin directory goes first so a plain ``python`` run by the script
    resolves to the environment's interpreter.

    Raises:
        PreconditionError: If base_env has no PATH.
    """
    search_path = base_env.get(EnvVar.PATH)
    if search_path is None:
        raise PreconditionError("Cannot read PATH from environment.")

    env = dict(base_env)
    bin_dir = os.path.join(environment_path, "bin")
    env[EnvVar.PATH] = f"{bin_dir}{os.pathsep}{search_path}"
    return env


def exit_status(return_code: int) -> int:
    """Map a child return code to this process's exit status.

    A child killed by signal N reports -N; shells report that as 128 + N.
    """
    if return_code < 0:
        return 128 - return_code
    return return_code


class Launcher:
    def __init__(self, subprocess: Optional[SubprocessPrimitive] = None):
        self.subprocess = subprocess or SubprocessPrimitive()

    def launch(
        self,
        environment_path: str,
        script_path: str,
        args: List[str],
        cwd: Optional[str] = None,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Run ``<environment>/bin/python script_path args...`` and wait.

        Args:
            environment_path: Resolved environment root.
            script_path: Script to run, relative to cwd or absolute.
            args: Arguments forwarded verbatim.
            cwd: Working directory for the child (default: inherited).
            base_env: Environment to derive from (default: os.environ).

        Returns:
            Exit status for this process.

        Raises:
            PreconditionError: If PATH is unset.
            LaunchError: If the interpreter cannot be spawned.
        """
        env = build_env(environment_path, os.environ if base_env is None else base_env)
        interpreter = python_bin(environment_path)
        command = [interpreter, script_path, *args]

        logger.debug("Launching %s", command)
        result = self.subprocess.run_foreground(command, cwd=cwd, env=env)

        if not result.started:
            raise LaunchError(
                f"failed to execute process {interpreter}: {result.error}",
                executable=interpreter,
            )

        status = exit_status(result.return_code)
        logger.debug("%s exited with status %d", script_path, status)
        return status
