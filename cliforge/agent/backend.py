"""Presets and command building for the supported agent CLIs."""

from __future__ import annotations

import contextlib
import enum
import logging
import os
import tempfile
import weakref
from dataclasses import dataclass, field
from typing import Any

from cliforge.agent.config import AgentConfig, ConfigPromptMode

logger = logging.getLogger(__name__)

# Prompts longer than this many bytes go through a temp file to stay clear of ARG_MAX.
LARGE_PROMPT_THRESHOLD = 7000

_CODEX_DEPRECATED = ("--dangerously-bypass-approvals-and-sandbox", "--yolo")
_FULL_AUTO = "--full-auto"


class OutputFormat(enum.Enum):
    """What a backend writes on stdout."""

    TEXT = "text"
    STREAM_JSON = "stream-json"
    PI_STREAM_JSON = "pi-stream-json"
    ACP = "acp"


class PromptMode(enum.Enum):
    """How the prompt reaches the child process."""

    ARG = "arg"
    STDIN = "stdin"


class BackendError(Exception):
    """A backend could not be constructed."""


class CustomBackendRequiresCommand(BackendError):
    """The custom backend was chosen without a command."""

    def __init__(self) -> None:
        super().__init__("custom backend requires a command to be specified")


class UnknownBackend(BackendError):
    """No preset exists under the given name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown backend: {name}")
        self.name = name


@dataclass(frozen=True)
class _Preset:
    command: str
    args: tuple[str, ...]
    prompt_mode: PromptMode
    prompt_flag: str | None
    output_format: OutputFormat


_HEADLESS_PRESETS: dict[str, _Preset] = {
    "claude": _Preset(
        "claude",
        ("--dangerously-skip-permissions", "--verbose", "--output-format", "stream-json"),
        PromptMode.ARG,
        "-p",
        OutputFormat.STREAM_JSON,
    ),
    "kiro": _Preset(
        "kiro-cli",
        ("chat", "--no-interactive", "--trust-all-tools"),
        PromptMode.ARG,
        None,
        OutputFormat.TEXT,
    ),
    "kiro-acp": _Preset("kiro-cli", ("acp",), PromptMode.STDIN, None, OutputFormat.ACP),
    "gemini": _Preset("gemini", ("--yolo",), PromptMode.ARG, "-p", OutputFormat.TEXT),
    "codex": _Preset("codex", ("exec", "--full-auto"), PromptMode.ARG, None, OutputFormat.TEXT),
    "amp": _Preset("amp", ("--dangerously-allow-all",), PromptMode.ARG, "-x", OutputFormat.TEXT),
    "copilot": _Preset("copilot", ("--allow-all-tools",), PromptMode.ARG, "-p", OutputFormat.TEXT),
    "opencode": _Preset("opencode", ("run",), PromptMode.ARG, None, OutputFormat.TEXT),
    "pi": _Preset(
        "pi",
        ("-p", "--mode", "json", "--no-session"),
        PromptMode.ARG,
        None,
        OutputFormat.PI_STREAM_JSON,
    ),
    "roo": _Preset("roo", ("--print", "--ephemeral"), PromptMode.ARG, None, OutputFormat.TEXT),
}

_INTERACTIVE_PRESETS: dict[str, _Preset] = {
    "claude": _Preset(
        "claude", ("--dangerously-skip-permissions",), PromptMode.ARG, None, OutputFormat.TEXT
    ),
    "kiro": _Preset(
        "kiro-cli", ("chat", "--trust-all-tools"), PromptMode.ARG, None, OutputFormat.TEXT
    ),
    "gemini": _Preset("gemini", ("--yolo",), PromptMode.ARG, "-i", OutputFormat.TEXT),
    "codex": _Preset("codex", (), PromptMode.ARG, None, OutputFormat.TEXT),
    "amp": _Preset("amp", (), PromptMode.ARG, "-x", OutputFormat.TEXT),
    "copilot": _Preset("copilot", (), PromptMode.ARG, "-p", OutputFormat.TEXT),
    "opencode": _Preset("opencode", (), PromptMode.ARG, "--prompt", OutputFormat.TEXT),
    "pi": _Preset("pi", ("--no-session",), PromptMode.ARG, None, OutputFormat.TEXT),
    "roo": _Preset("roo", (), PromptMode.ARG, None, OutputFormat.TEXT),
}

# Flags dropped from a backend's args when it runs interactively.
_INTERACTIVE_DROPPED: dict[str, frozenset[str]] = {
    "kiro-cli": frozenset({"--no-interactive"}),
    "codex": frozenset({"--full-auto"}),
    "amp": frozenset({"--dangerously-allow-all"}),
    "copilot": frozenset({"--allow-all-tools"}),
    "roo": frozenset({"--print", "--ephemeral"}),
}


def reconcile_codex_args(args: list[str]) -> list[str]:
    """Replace deprecated codex flags with ``--full-auto`` and drop duplicates of it."""
    result = list(args)
    if any(arg in _CODEX_DEPRECATED for arg in result):
        result = [arg for arg in result if arg not in _CODEX_DEPRECATED]
        if _FULL_AUTO not in result:
            if "exec" in result:
                result.insert(result.index("exec") + 1, _FULL_AUTO)
            else:
                result.append(_FULL_AUTO)

    seen = False
    collapsed = []
    for arg in result:
        if arg == _FULL_AUTO:
            if seen:
                continue
            seen = True
        collapsed.append(arg)
    return collapsed


def _remove_file(path: str) -> None:
    with contextlib.suppress(FileNotFoundError):
        os.unlink(path)


def _write_temp_prompt(prompt: str) -> str | None:
    """Write ``prompt`` to a new temp file and return its path, or None on failure."""
    try:
        fd, path = tempfile.mkstemp(prefix="agent-prompt-", suffix=".txt")
    except OSError as exc:
        logger.warning("Failed to create temp file for prompt: %s", exc)
        return None
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(prompt.encode("utf-8"))
    except OSError as exc:
        logger.warning("Failed to write prompt to temp file: %s", exc)
        _remove_file(path)
        return None
    return path


class CommandSpec:
    """A command ready to run.

    A prompt written to a temp file lives until :meth:`close` is called or the
    spec is garbage-collected; use the spec as a context manager around execution.
    """

    def __init__(
        self,
        command: str,
        args: list[str],
        stdin_input: str | None = None,
        temp_path: str | None = None,
    ) -> None:
        self.command = command
        self.args = args
        self.stdin_input = stdin_input
        self.temp_path = temp_path
        self._finalizer = (
            weakref.finalize(self, _remove_file, temp_path) if temp_path is not None else None
        )

    def close(self) -> None:
        """Delete the temp prompt file, if any."""
        if self._finalizer is not None:
            self._finalizer()

    def __enter__(self) -> CommandSpec:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"CommandSpec(command={self.command!r}, args={self.args!r}, "
            f"stdin_input={self.stdin_input is not None}, temp_path={self.temp_path!r})"
        )


@dataclass
class CliBackend:
    """How to start one agent CLI and hand it a prompt.

    Prompts are passed straight to the child process without a shell; only pass
    prompts from trusted local sources.
    """

    command: str
    args: list[str] = field(default_factory=list)
    prompt_mode: PromptMode = PromptMode.ARG
    prompt_flag: str | None = None
    output_format: OutputFormat = OutputFormat.TEXT
    env_vars: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def _from_preset(cls, table: dict[str, _Preset], name: str) -> CliBackend:
        preset = table.get(name)
        if preset is None:
            raise UnknownBackend(name)
        return cls(
            command=preset.command,
            args=list(preset.args),
            prompt_mode=preset.prompt_mode,
            prompt_flag=preset.prompt_flag,
            output_format=preset.output_format,
        )

    @classmethod
    def from_agent_config(cls, config: AgentConfig) -> CliBackend:
        """Build a backend from config, applying extra args and a command override."""
        if config.backend == "custom":
            return cls.custom(config)

        backend = cls.from_name_with_args(config.backend, config.args)
        if config.command is not None:
            backend.command = config.command
        return backend

    @classmethod
    def from_name(cls, name: str) -> CliBackend:
        """Return the headless preset called ``name``."""
        return cls._from_preset(_HEADLESS_PRESETS, name)

    @classmethod
    def from_name_with_args(cls, name: str, extra_args: list[str]) -> CliBackend:
        """Return the headless preset called ``name`` with ``extra_args`` appended."""
        backend = cls.from_name(name)
        backend.args.extend(extra_args)
        if backend.command == "codex":
            backend.args = reconcile_codex_args(backend.args)
        return backend

    @classmethod
    def for_interactive_prompt(cls, name: str) -> CliBackend:
        """Return the interactive preset called ``name``."""
        return cls._from_preset(_INTERACTIVE_PRESETS, name)

    @classmethod
    def custom(cls, config: AgentConfig) -> CliBackend:
        """Build a backend entirely from config; a command is required."""
        if config.command is None:
            raise CustomBackendRequiresCommand()
        prompt_mode = (
            PromptMode.STDIN if config.prompt_mode is ConfigPromptMode.STDIN else PromptMode.ARG
        )
        return cls(
            command=config.command,
            args=list(config.args),
            prompt_mode=prompt_mode,
            prompt_flag=config.prompt_flag,
            output_format=OutputFormat.TEXT,
        )

    def _interactive_args(self, args: list[str]) -> list[str]:
        dropped = _INTERACTIVE_DROPPED.get(self.command, frozenset())
        return [arg for arg in args if arg not in dropped]

    def build_command(self, prompt: str, interactive: bool = False) -> CommandSpec:
        """Return the command, arguments and stdin needed to run ``prompt``."""
        args = list(self.args)
        if interactive:
            args = self._interactive_args(args)

        stdin_input: str | None = None
        temp_path: str | None = None

        if self.prompt_mode is PromptMode.STDIN:
            stdin_input = prompt
        elif self.command == "roo" and "--print" in args:
            temp_path = _write_temp_prompt(prompt)
            if temp_path is None:
                args.append(prompt)
            else:
                args.extend(["--prompt-file", temp_path])
        else:
            prompt_text = prompt
            if len(prompt.encode("utf-8")) > LARGE_PROMPT_THRESHOLD:
                temp_path = _write_temp_prompt(prompt)
                if temp_path is not None:
                    prompt_text = f"Please read and execute the task in {temp_path}"
            if self.prompt_flag is not None:
                args.append(self.prompt_flag)
            args.append(prompt_text)

        logger.debug(
            "Built CLI command: command=%s args_count=%d prompt_len=%d interactive=%s "
            "uses_stdin=%s uses_temp_file=%s",
            self.command,
            len(args),
            len(prompt),
            interactive,
            stdin_input is not None,
            temp_path is not None,
        )
        return CommandSpec(self.command, args, stdin_input, temp_path)