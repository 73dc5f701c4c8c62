"""Agent configuration stored in the ``[agent]`` section of the config file."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_BACKEND = "claude"
DEFAULT_IDLE_TIMEOUT_SECS = 30
_MAX_U32 = 2**32 - 1


class ConfigPromptMode(enum.Enum):
    """How prompts are handed to the agent CLI, as written in the config file."""

    ARG = "arg"
    STDIN = "stdin"


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"agent.{key} must be a string, got {value!r}")
    return value


@dataclass
class AgentConfig:
    """Which agent CLI to run and how to invoke it."""

    backend: str = DEFAULT_BACKEND
    command: str | None = None
    args: list[str] = field(default_factory=list)
    prompt_mode: ConfigPromptMode = ConfigPromptMode.ARG
    prompt_flag: str | None = None
    idle_timeout_secs: int = DEFAULT_IDLE_TIMEOUT_SECS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AgentConfig:
        """Build a config from parsed TOML data; missing keys take their defaults."""
        config = cls()

        if "backend" in data:
            backend = data["backend"]
            if not isinstance(backend, str):
                raise ValueError(f"agent.backend must be a string, got {backend!r}")
            config.backend = backend

        config.command = _optional_str(data, "command")
        config.prompt_flag = _optional_str(data, "prompt_flag")

        if "args" in data:
            args = data["args"]
            if not isinstance(args, (list, tuple)) or not all(isinstance(a, str) for a in args):
                raise ValueError(f"agent.args must be a list of strings, got {args!r}")
            config.args = list(args)

        if "prompt_mode" in data:
            mode = data["prompt_mode"]
            try:
                config.prompt_mode = ConfigPromptMode(mode)
            except ValueError:
                raise ValueError(
                    f"agent.prompt_mode must be \"arg\" or \"stdin\", got {mode!r}"
                ) from None

        if "idle_timeout_secs" in data:
            timeout = data["idle_timeout_secs"]
            if isinstance(timeout, bool) or not isinstance(timeout, int):
                raise ValueError(f"agent.idle_timeout_secs must be an integer, got {timeout!r}")
            if not 0 <= timeout <= _MAX_U32:
                raise ValueError(f"agent.idle_timeout_secs out of range: {timeout}")
            config.idle_timeout_secs = timeout

        return config

    def to_dict(self) -> dict[str, Any]:
        """Return TOML-ready data; unset optional values are left out."""
        result: dict[str, Any] = {"backend": self.backend}
        if self.command is not None:
            result["command"] = self.command
        result["args"] = list(self.args)
        result["prompt_mode"] = self.prompt_mode.value
        if self.prompt_flag is not None:
            result["prompt_flag"] = self.prompt_flag
        result["idle_timeout_secs"] = self.idle_timeout_secs
        return result