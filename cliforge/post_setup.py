"""Steps after rendering: git init, cargo check and the agent prompt."""

from __future__ import annotations

import asyncio
import os
import subprocess
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    PACKAGE_VERSION = version("cliforge")
except PackageNotFoundError:
    PACKAGE_VERSION = "0.1.0"


def _say(text: str = "", end: str = "\n") -> None:
    print(text, end=end, file=sys.stderr, flush=True)


def _git(project_dir: Path, *args: str) -> bool:
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=project_dir,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return completed.returncode == 0


def git_init(project_dir: str | os.PathLike[str]) -> bool:
    """Initialise a repository and make the first commit; True on full success."""
    project_dir = Path(project_dir)
    _say("Initializing git repository... ", end="")

    if not _git(project_dir, "init", "--initial-branch=main"):
        _say("warning: git init failed, skipping")
        return False

    if not _git(project_dir, "add", "-A"):
        _say("warning: git add failed, skipping initial commit")
        return False

    message = f"chore: init from cliforge v{PACKAGE_VERSION}"
    if _git(project_dir, "commit", "-m", message):
        _say("done")
        return True
    _say("warning: initial commit failed")
    return False


async def cargo_check(project_dir: str | os.PathLike[str]) -> bool:
    """Run ``cargo check`` in the project; True when it passes."""
    _say("Running cargo check... ", end="")
    try:
        process = await asyncio.create_subprocess_exec(
            "cargo",
            "check",
            cwd=Path(project_dir),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError:
        _say("warning: cargo not found — skipping check")
        return False

    if await process.wait() == 0:
        _say("ok")
        return True
    _say("warning: cargo check failed — verify Rust toolchain is installed")
    return False


def agent_prompt(project_name: str, project_dir: str | os.PathLike[str]) -> str:
    """Return the closing message with a prompt to hand to an AI agent."""
    shown = str(project_dir)
    lines = [
        "",
        f"✅ Project {project_name} created at {shown}",
        "",
        "To start developing with an AI agent, copy the prompt below:",
        "",
        "---",
        f'I have a new Rust CLI project "{project_name}" initialized from cliforge.',
        f"The project is at {shown} with git already initialized.",
        "",
        "Read CLAUDE.md and docs/guides/agent-quickstart.md first, then:",
        "1. Update CLAUDE.md with the project description",
        "2. Replace the Hello example command with actual CLI commands",
        "3. Customize ExampleConfig in src/app_config.rs",
        f"4. Test agent discovery: `{project_name} --agent-describe`",
        "5. Add new commands: define in cli/mod.rs, add {Name}Result in response.rs",
        "6. Run `just pre-commit` to verify everything passes",
        "---",
    ]
    return "\n".join(lines)


async def run(project_dir: str | os.PathLike[str], project_name: str) -> None:
    """Run every post-setup step in the generated project directory."""
    git_init(project_dir)
    await cargo_check(project_dir)
    _say(agent_prompt(project_name, project_dir))