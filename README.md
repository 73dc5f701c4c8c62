# cliforge

`cliforge` is a library for two jobs:

- rendering a project template directory into a new project, replacing
  placeholders, then initialising git and running a build check;
- running prompts through local AI agent command-line tools (Claude, Gemini,
  Codex, Kiro and others) and reporting results as agent-friendly JSON.

## Installation

```sh
pip install .
```

For development and tests:

```sh
pip install ".[test]"
pytest
```

## Rendering a template

```python
import asyncio

from cliforge import post_setup, template

template.render("path/to/template", "my-cool-cli", "my-cool-cli", "my_cool_cli", "myorg")
asyncio.run(post_setup.run("my-cool-cli", "my-cool-cli"))
```

`template.render(template_dir, output_dir, project_name, crate_name, github_org)`
copies every file under `template_dir` into `output_dir`. In text files
(see `template.is_text_file`: extensions such as `.rs`, `.toml`, `.md`,
`.json`, `.sh`, and files named `justfile`, `.gitignore`, `LICENSE`,
`Dockerfile`, ...) the placeholders `{{project-name}}`, `{{crate_name}}` and
`{{github-org}}` are replaced (`template.replace_placeholders`). Directories
named `target`, `.git` or `.worktrees`, and `cargo-generate.toml`, are
skipped; `.sh` files are made executable on POSIX. A missing template
directory raises `FileNotFoundError`.

`post_setup` provides the steps after rendering:

- `git_init(project_dir)` runs `git init --initial-branch=main`, `git add -A`
  and an initial commit, returning `True` only if all succeed;
- `cargo_check(project_dir)` (async) runs `cargo check`, returning `True`
  when it passes;
- `agent_prompt(project_name, project_dir)` returns the closing message with
  a prompt to hand to an AI agent;
- `run(project_dir, project_name)` (async) does all three, writing progress
  and warnings to stderr. Failures are warnings and never raise.

Errors meant for the user derive from `cliforge.errors.AppError`:
`ValidationError`, `SetupError` (shown as `setup failed: ...`) and
`PostSetupError` (shown as `post-setup command failed: ...`).

## JSON responses

```python
from cliforge.describe.response import AgentResponse

AgentResponse.ok({"url": "https://app.example.com"}).print()
# {"ok":true,"data":{"url":"https://app.example.com"}}

AgentResponse.err("not found", "try `mycli list`").print()
# {"ok":false,"error":"not found","suggestion":"try `mycli list`"}
```

`to_dict()` and `to_json()` return the same data without printing.
Dataclasses, enums, lists and dicts in `data` are converted to plain JSON.

## Agent backends

```python
import asyncio

from cliforge.agent.backend import CliBackend
from cliforge.agent.executor import CliExecutor

backend = CliBackend.from_name("claude")
executor = CliExecutor(backend)
result = asyncio.run(executor.execute_capture("summarise the README"))
print(result.success, result.exit_code, result.output)
```

Named presets are `claude`, `kiro`, `kiro-acp`, `gemini`, `codex`, `amp`,
`copilot`, `opencode`, `pi` and `roo` (`CliBackend.from_name`);
`CliBackend.for_interactive_prompt` returns the interactive variants.
`CliBackend.from_agent_config` builds a backend from an
`cliforge.agent.config.AgentConfig`, appending its extra args and honouring
a command override; the `custom` backend takes everything from the config and
raises `CustomBackendRequiresCommand` without a command. Unknown names raise
`UnknownBackend`. Deprecated codex flags are replaced with `--full-auto`
(`reconcile_codex_args`).

`build_command(prompt, interactive)` returns a `CommandSpec`. Prompts longer
than 7000 bytes are written to a temporary file and the agent is asked to
read it; `roo` in print mode always uses `--prompt-file`. Use the spec as a
context manager (or call `close()`) to delete that file.

`CliExecutor.execute(prompt, output_writer, timeout, verbose)` streams stdout
lines to `output_writer` as they arrive and collects stdout and stderr
separately into an `ExecutionResult`. With `timeout` (seconds), a process that
prints nothing for that long is terminated and marked `timed_out`. With
`verbose`, stderr lines are also written, prefixed with `[stderr]`.
`execute_capture` and `execute_capture_with_timeout` run without streaming.

## Application support

`cliforge.app` holds pieces for an agent-friendly application:

- `paths.init_data_dir()` resolves the data directory from `APP_DATA_DIR`
  (which must be a non-empty absolute path) or `~/.cliforge-app`, and caches
  it; `data_dir()`, `config_file()` (`<data>/config.toml`), `cache_dir()` and
  `reset()` work from that cache;
- `config.init()` loads `config.toml` into an `AppConfig` (sections
  `example` and `agent`), using defaults when the file is missing and raising
  `ConfigParseError` when it is malformed; `get()`, `save(cfg)` and `reset()`
  complete it;
- `http.client()` and `http.download_client()` return shared `httpx`
  clients, the first with a 30-second timeout, the second timing only the
  connection and asking for uncompressed bodies;
- `errors` holds `ConfigError`, `ConfigParseError`, `PathResolutionError`,
  `AgentExecutionError`, `AgentBackendError` and `HttpError`.

## What this package does not do

There is no command-line program: nothing is installed to run from a shell,
and there is no interactive prompting for a project name or organisation, no
check of project names, and no refusal of an existing output directory —
callers of `template.render` handle those themselves. No template directory
is shipped; pass your own. There is no generator for a self-describing
command schema, no typed result classes for application commands, and no
`hello`, `config` or `agent` commands built on the pieces above.