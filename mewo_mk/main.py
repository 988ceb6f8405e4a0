"""mk entry point.

Runs the project's make.py under the project's own virtual environment.
Every argument is forwarded to the script; mk interprets none of them.
"""

import os
import sys
from typing import List, Optional

from mewo_mk.config import load_config
from mewo_mk.constants import EnvVar
from mewo_mk.output import die
from mewo_mk.primitives.cache_store import CacheStore
from mewo_mk.primitives.errors import MkError, PreconditionError
from mewo_mk.runtime.env_resolver import EnvResolver
from mewo_mk.runtime.launcher import Launcher
from mewo_mk.utils.logger import get_logger
from mewo_mk.utils.path_utils import get_cache_file, get_project_dir

logger = get_logger(__name__)


def run(args: List[str]) -> int:
    """Resolve the environment and launch the script; return its exit status."""
    project_dir = get_project_dir()
    config = load_config(project_dir)

    if not (project_dir / config.script).exists():
        raise PreconditionError(f"Cannot find '{config.script}' file.")
    if EnvVar.PATH not in os.environ:
        raise PreconditionError("Cannot read PATH from environment.")

    cache = CacheStore(config.cache_file or get_cache_file())
    environment_path = EnvResolver(cache, config.tools).resolve(str(project_dir))

    return Launcher().launch(environment_path, config.script, args, cwd=str(project_dir))


def main(argv: Optional[List[str]] = None):
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        status = run(args)
    except MkError as e:
        logger.debug("Fatal: %s", e.message, exc_info=True)
        die(e.message)
        return

    sys.exit(status)


if __name__ == "__main__":
    main()
