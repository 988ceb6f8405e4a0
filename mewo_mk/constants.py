"""mk constants

Centralized names for the cache and config locations, environment variables,
and the default discovery tool chain.
"""

# Directory name used under ~/.cache and ~/.config.
APP_DIR = "mewo_mk"

CACHE_FILE_NAME = "cache"
LOG_FILE_NAME = "mk.log"
USER_CONFIG_FILE_NAME = "config.yaml"
PROJECT_CONFIG_FILE_NAME = ".mk.yaml"

DEFAULT_SCRIPT = "make.py"

# Prefix of every fatal diagnostic printed on stderr.
PROG = "mk"


class EnvVar:
    """Environment variables read by mk."""

    PATH = "PATH"
    DEBUG = "MK_DEBUG"
    CACHE_DIR = "MK_CACHE_DIR"
    CONFIG = "MK_CONFIG"


class ParseRule:
    """How a discovery tool's stdout becomes an environment path."""

    STRIP = "strip"
    FIRST_LINE = "first_line"

    ALL = [STRIP, FIRST_LINE]


# Tried in order. The last tool is authoritative: its failure is fatal.
DEFAULT_TOOLS = [
    {
        "name": "uv",
        "command": [
            "uv",
            "run",
            "python",
            "-c",
            "import os; print(os.environ['VIRTUAL_ENV'])",
        ],
        "parse": ParseRule.STRIP,
    },
    {
        "name": "poetry",
        "command": ["poetry", "env", "info", "--path"],
        "parse": ParseRule.STRIP,
    },
]

NO_VENV_HINT = "This usually means there is no venv."
