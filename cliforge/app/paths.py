"""Central location of the application's data directories.

Every path derives from one data root, resolved once by :func:`init_data_dir`.
The ``APP_DATA_DIR`` environment variable overrides the default root.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

APP_NAME = "cliforge-app"
DATA_DIR_ENV = "APP_DATA_DIR"

_data_dir: Path | None = None


def init_data_dir() -> Path:
    """Resolve, validate and cache the data directory.

    ``APP_DATA_DIR`` is used when set (it must be a non-empty absolute path);
    otherwise the root is ``~/.<app name>``.
    """
    global _data_dir
    if _data_dir is not None:
        return _data_dir

    override = os.environ.get(DATA_DIR_ENV)
    if override is not None:
        path = Path(override)
        if not override or not path.is_absolute():
            raise _path_error(
                f"{DATA_DIR_ENV} must be a non-empty absolute path, got: {json.dumps(override)}"
            )
    else:
        try:
            home = Path.home()
        except RuntimeError:
            raise _path_error(
                f"home directory must be resolvable — set {DATA_DIR_ENV} as a fallback"
            ) from None
        path = home / f".{APP_NAME}"

    _data_dir = path
    return path


def _path_error(message: str) -> Exception:
    from cliforge.app.errors import PathResolutionError

    return PathResolutionError(message)


def data_dir() -> Path:
    """Return the data root; :func:`init_data_dir` must have been called."""
    if _data_dir is None:
        raise RuntimeError("data_dir() called before init_data_dir()")
    return _data_dir


def config_file() -> Path:
    """Return ``<data>/config.toml``."""
    return data_dir() / "config.toml"


def cache_dir() -> Path:
    """Return ``<data>/cache``."""
    return data_dir() / "cache"


def reset() -> Path | None:
    """Forget the cached data directory and return the one that was cached."""
    global _data_dir
    previous, _data_dir = _data_dir, None
    return previous