import pytest

from cliforge.post_setup import PACKAGE_VERSION, agent_prompt, cargo_check, git_init, run


def fake_tool(bin_dir, name, body):
    script = bin_dir / name
    script.write_text("#!/bin/sh\n" + body)
    script.chmod(0o755)
    return script


@pytest.fixture
def bin_dir(tmp_path, monkeypatch):
    directory = tmp_path / "bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory


@pytest.fixture
def project(tmp_path):
    directory = tmp_path / "proj"
    directory.mkdir()
    return directory


def test_agent_prompt_mentions_project(tmp_path):
    text = agent_prompt("demo-cli", tmp_path)
    assert f"✅ Project demo-cli created at {tmp_path}" in text
    assert "`demo-cli --agent-describe`" in text
    assert "add {Name}Result in response.rs" in text
    assert text.count("\n---") == 2


def test_git_init_without_git(bin_dir, project, capsys):
    assert git_init(project) is False
    assert "warning: git init failed, skipping" in capsys.readouterr().err


def test_git_init_add_failure(bin_dir, project, capsys):
    fake_tool(bin_dir, "git", 'if [ "$1" = add ]; then exit 1; fi\nexit 0\n')
    assert git_init(project) is False
    assert "warning: git add failed, skipping initial commit" in capsys.readouterr().err


def test_git_init_commit_failure(bin_dir, project, capsys):
    fake_tool(bin_dir, "git", 'if [ "$1" = commit ]; then exit 1; fi\nexit 0\n')
    assert git_init(project) is False
    assert "warning: initial commit failed" in capsys.readouterr().err


def test_git_init_success_records_commit(bin_dir, project, capsys):
    log = project / "git.log"
    fake_tool(bin_dir, "git", f'echo "$@" >> "{log}"\nexit 0\n')
    assert git_init(project) is True
    calls = log.read_text().splitlines()
    assert calls[0] == "init --initial-branch=main"
    assert calls[1] == "add -A"
    assert calls[2] == f"commit -m chore: init from cliforge v{PACKAGE_VERSION}"
    assert capsys.readouterr().err.endswith("done\n")


@pytest.mark.asyncio
async def test_cargo_check_missing(bin_dir, project, capsys):
    assert await cargo_check(project) is False
    assert "warning: cargo not found — skipping check" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_cargo_check_failure(bin_dir, project, capsys):
    fake_tool(bin_dir, "cargo", "exit 1\n")
    assert await cargo_check(project) is False
    assert "warning: cargo check failed" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_cargo_check_ok(bin_dir, project, capsys):
    fake_tool(bin_dir, "cargo", "exit 0\n")
    assert await cargo_check(project) is True
    assert capsys.readouterr().err.endswith("ok\n")


@pytest.mark.asyncio
async def test_run_prints_prompt_even_when_tools_missing(bin_dir, project, capsys):
    await run(project, "my-test-cli")
    err = capsys.readouterr().err
    assert "Project my-test-cli created" in err
    assert err.index("Initializing git repository") < err.index("Running cargo check")