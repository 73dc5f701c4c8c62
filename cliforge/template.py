"""Render a project template directory, replacing placeholders."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "template"

TEXT_EXTENSIONS = frozenset(
    {"rs", "toml", "yaml", "yml", "md", "json", "js", "sh", "lock"}
)

TEXT_FILE_NAMES = frozenset(
    {"justfile", ".gitignore", ".pre-commit-config.yaml", "LICENSE", "Dockerfile"}
)

SKIP_PATTERNS = frozenset({"target", ".git", ".worktrees", "cargo-generate.toml"})


def is_text_file(path: str | os.PathLike[str]) -> bool:
    """Return whether placeholders should be replaced in the file at ``path``."""
    path = Path(path)
    if path.suffix[1:] in TEXT_EXTENSIONS and path.suffix:
        return True
    return path.name in TEXT_FILE_NAMES


def replace_placeholders(
    text: str, project_name: str, crate_name: str, github_org: str
) -> str:
    """Substitute the template placeholders in ``text``."""
    return (
        text.replace("{{project-name}}", project_name)
        .replace("{{crate_name}}", crate_name)
        .replace("{{github-org}}", github_org)
    )


def render(
    template_dir: str | os.PathLike[str],
    output_dir: str | os.PathLike[str],
    project_name: str,
    crate_name: str,
    github_org: str,
) -> None:
    """Copy every template file into ``output_dir``, replacing placeholders."""
    root = Path(template_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"template directory not found: {root}")
    _render_dir(root, root, Path(output_dir), project_name, crate_name, github_org)


def _render_dir(
    root: Path,
    current: Path,
    output_dir: Path,
    project_name: str,
    crate_name: str,
    github_org: str,
) -> None:
    entries = sorted(current.iterdir())

    for entry in (e for e in entries if e.is_dir()):
        if entry.name in SKIP_PATTERNS:
            continue
        (output_dir / entry.relative_to(root)).mkdir(parents=True, exist_ok=True)
        _render_dir(root, entry, output_dir, project_name, crate_name, github_org)

    for entry in (e for e in entries if e.is_file()):
        rel_path = entry.relative_to(root)
        if any(part in SKIP_PATTERNS for part in rel_path.parts):
            continue

        target = output_dir / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)

        contents = entry.read_bytes()
        if is_text_file(rel_path):
            text = contents.decode("utf-8", errors="replace")
            replaced = replace_placeholders(text, project_name, crate_name, github_org)
            target.write_bytes(replaced.encode("utf-8"))
        else:
            target.write_bytes(contents)

        if os.name == "posix" and rel_path.suffix == ".sh":
            target.chmod(0o755)