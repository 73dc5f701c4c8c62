import os
from pathlib import Path

import pytest

from cliforge.agent.backend import (
    LARGE_PROMPT_THRESHOLD,
    BackendError,
    CliBackend,
    CommandSpec,
    CustomBackendRequiresCommand,
    OutputFormat,
    PromptMode,
    UnknownBackend,
    reconcile_codex_args,
)
from cliforge.agent.config import AgentConfig, ConfigPromptMode


def test_claude_headless_preset():
    backend = CliBackend.from_name("claude")
    assert backend.command == "claude"
    assert backend.args == [
        "--dangerously-skip-permissions",
        "--verbose",
        "--output-format",
        "stream-json",
    ]
    assert backend.prompt_flag == "-p"
    assert backend.output_format is OutputFormat.STREAM_JSON
    assert backend.env_vars == []


def test_kiro_acp_uses_stdin():
    backend = CliBackend.from_name("kiro-acp")
    assert backend.command == "kiro-cli"
    assert backend.prompt_mode is PromptMode.STDIN
    assert backend.output_format is OutputFormat.ACP


def test_unknown_backend():
    with pytest.raises(UnknownBackend) as info:
        CliBackend.from_name("nope")
    assert info.value.name == "nope"
    assert str(info.value) == "unknown backend: nope"
    assert isinstance(info.value, BackendError)


def test_kiro_acp_has_no_interactive_preset():
    with pytest.raises(UnknownBackend):
        CliBackend.for_interactive_prompt("kiro-acp")


def test_interactive_opencode_uses_prompt_flag():
    backend = CliBackend.for_interactive_prompt("opencode")
    assert backend.args == []
    assert backend.prompt_flag == "--prompt"


def test_custom_requires_command():
    with pytest.raises(CustomBackendRequiresCommand):
        CliBackend.custom(AgentConfig(backend="custom"))


def test_custom_backend_from_config():
    config = AgentConfig(
        backend="custom",
        command="my-agent",
        args=["--x"],
        prompt_mode=ConfigPromptMode.STDIN,
        prompt_flag="-q",
    )
    backend = CliBackend.from_agent_config(config)
    assert backend.command == "my-agent"
    assert backend.args == ["--x"]
    assert backend.prompt_mode is PromptMode.STDIN
    assert backend.prompt_flag == "-q"
    assert backend.output_format is OutputFormat.TEXT


def test_from_agent_config_extra_args_and_override():
    config = AgentConfig(backend="gemini", command="/opt/gemini", args=["--debug"])
    backend = CliBackend.from_agent_config(config)
    assert backend.command == "/opt/gemini"
    assert backend.args == ["--yolo", "--debug"]


def test_from_agent_config_reconciles_codex():
    config = AgentConfig(backend="codex", args=["--yolo", "--full-auto"])
    backend = CliBackend.from_agent_config(config)
    assert backend.args == ["exec", "--full-auto"]


def test_from_name_with_args_appends():
    backend = CliBackend.from_name_with_args("amp", ["--extra"])
    assert backend.args == ["--dangerously-allow-all", "--extra"]


def test_reconcile_inserts_after_exec():
    args = ["exec", "--dangerously-bypass-approvals-and-sandbox", "--model", "m"]
    assert reconcile_codex_args(args) == ["exec", "--full-auto", "--model", "m"]


def test_reconcile_appends_without_exec():
    assert reconcile_codex_args(["--yolo"]) == ["--full-auto"]


def test_reconcile_collapses_duplicates_and_is_idempotent():
    once = reconcile_codex_args(["exec", "--full-auto", "--full-auto"])
    assert once == ["exec", "--full-auto"]
    assert reconcile_codex_args(once) == once


def test_build_command_with_flag():
    spec = CliBackend.from_name("gemini").build_command("do it")
    assert spec.command == "gemini"
    assert spec.args == ["--yolo", "-p", "do it"]
    assert spec.stdin_input is None
    assert spec.temp_path is None


def test_build_command_stdin_mode():
    spec = CliBackend.from_name("kiro-acp").build_command("hello")
    assert spec.args == ["acp"]
    assert spec.stdin_input == "hello"


def test_interactive_filters_args():
    backend = CliBackend.from_name("kiro")
    spec = backend.build_command("hi", interactive=True)
    assert "--no-interactive" not in spec.args
    assert spec.args[-1] == "hi"
    assert backend.args[1] == "--no-interactive"


def test_threshold_boundary_stays_inline():
    prompt = "x" * LARGE_PROMPT_THRESHOLD
    spec = CliBackend.from_name("codex").build_command(prompt)
    assert spec.temp_path is None
    assert spec.args[-1] == prompt


def test_large_prompt_goes_to_temp_file():
    prompt = "y" * (LARGE_PROMPT_THRESHOLD + 1)
    with CliBackend.from_name("claude").build_command(prompt) as spec:
        path = Path(spec.temp_path)
        assert path.read_text(encoding="utf-8") == prompt
        assert spec.args[-2] == "-p"
        assert spec.args[-1] == f"Please read and execute the task in {spec.temp_path}"
    assert not path.exists()


def test_roo_headless_uses_prompt_file():
    spec = CliBackend.from_name("roo").build_command("short")
    try:
        assert spec.args[:2] == ["--print", "--ephemeral"]
        assert spec.args[2] == "--prompt-file"
        assert Path(spec.args[3]).read_text(encoding="utf-8") == "short"
        assert spec.args[3] == spec.temp_path
    finally:
        spec.close()
    assert not os.path.exists(spec.args[3])


def test_roo_interactive_passes_prompt_inline():
    spec = CliBackend.from_name("roo").build_command("short", interactive=True)
    assert spec.args == ["short"]
    assert spec.temp_path is None


def test_close_is_safe_twice():
    spec = CommandSpec("echo", ["a"])
    spec.close()
    spec.close()
    assert spec.args == ["a"]