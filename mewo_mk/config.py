"""Layered YAML configuration.

Cascade: built-in defaults → user config → project config (.mk.yaml).
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mewo_mk.constants import (
    DEFAULT_SCRIPT,
    DEFAULT_TOOLS,
    PROJECT_CONFIG_FILE_NAME,
    ParseRule,
)
from mewo_mk.primitives.errors import ConfigurationError
from mewo_mk.utils.path_utils import get_user_config_file


@dataclass(frozen=True)
class ToolDescriptor:
    """One discovery tool of the fallback chain.

    Attributes:
        name: Display name used in logs and diagnostics.
        command: Argument vector to run.
        parse: How stdout becomes a path (see ParseRule).
    """

    name: str
    command: List[str]
    parse: str = ParseRule.STRIP

    def parse_output(self, stdout: str) -> str:
        if self.parse == ParseRule.FIRST_LINE:
            for line in stdout.splitlines():
                if line.strip():
                    return line.strip()
            return ""
        return stdout.strip()

    @property
    def display(self) -> str:
        return " ".join(self.command)


@dataclass
class MkConfig:
    script: str = DEFAULT_SCRIPT
    cache_file: Optional[Path] = None
    tools: List[ToolDescriptor] = field(default_factory=list)


def _defaults() -> Dict[str, Any]:
    return {"script": DEFAULT_SCRIPT, "cache_file": None, "tools": copy.deepcopy(DEFAULT_TOOLS)}


class ConfigLoader:
    """Loads and merges YAML config files into an MkConfig."""

    def load(self, project_path: Path) -> MkConfig:
        config = _defaults()

        user_config_path = get_user_config_file()
        if user_config_path.exists():
            config = self._merge(config, self._load_yaml(user_config_path))

        project_config_path = Path(project_path) / PROJECT_CONFIG_FILE_NAME
        if project_config_path.exists():
            config = self._merge(config, self._load_yaml(project_config_path))

        return self._build(config)

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Unable to read config file {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge override into base.

        Dicts merge recursively; lists and scalars replace.
        """
        result = dict(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def _build(self, data: Dict[str, Any]) -> MkConfig:
        script = data.get("script")
        if not isinstance(script, str) or not script:
            raise ConfigurationError("'script' must be a non-empty string", field="script")

        cache_file = data.get("cache_file")
        if cache_file is not None:
            if not isinstance(cache_file, str) or not cache_file:
                raise ConfigurationError(
                    "'cache_file' must be a non-empty string", field="cache_file"
                )
            cache_file = Path(cache_file).expanduser()

        raw_tools = data.get("tools")
        if not isinstance(raw_tools, list) or not raw_tools:
            raise ConfigurationError("'tools' must be a non-empty list", field="tools")

        return MkConfig(
            script=script,
            cache_file=cache_file,
            tools=[self._build_tool(i, raw) for i, raw in enumerate(raw_tools)],
        )

    def _build_tool(self, index: int, raw: Any) -> ToolDescriptor:
        field_name = f"tools[{index}]"
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{field_name} must be a mapping", field=field_name)

        command = raw.get("command")
        if (
            not isinstance(command, list)
            or not command
            or not all(isinstance(part, str) for part in command)
        ):
            raise ConfigurationError(
                f"{field_name}.command must be a non-empty list of strings",
                field=f"{field_name}.command",
            )

        parse = raw.get("parse", ParseRule.STRIP)
        if parse not in ParseRule.ALL:
            raise ConfigurationError(
                f"{field_name}.parse must be one of {', '.join(ParseRule.ALL)}, got {parse!r}",
                field=f"{field_name}.parse",
            )

        name = raw.get("name") or command[0]
        return ToolDescriptor(name=str(name), command=list(command), parse=parse)


def load_config(project_path: Path) -> MkConfig:
    return ConfigLoader().load(project_path)
