"""Application configuration kept in a TOML file under the data directory."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import tomli_w

from cliforge.agent.config import AgentConfig
from cliforge.app import paths
from cliforge.app.errors import ConfigParseError

DEFAULT_SETTING = "default-value"


@dataclass
class ExampleConfig:
    """Example configuration section; replace with your own."""

    setting: str = DEFAULT_SETTING

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ExampleConfig:
        config = cls()
        if "setting" in data:
            setting = data["setting"]
            if not isinstance(setting, str):
                raise ValueError(f"example.setting must be a string, got {setting!r}")
            config.setting = setting
        return config


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, Mapping):
        raise ValueError(f"[{name}] must be a table, got {section!r}")
    return section


@dataclass
class AppConfig:
    """All configuration sections of the application."""

    example: ExampleConfig = field(default_factory=ExampleConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppConfig:
        """Build a config from parsed TOML; missing sections take their defaults."""
        return cls(
            example=ExampleConfig._from_dict(_section(data, "example")),
            agent=AgentConfig.from_dict(_section(data, "agent")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return TOML-ready data."""
        return {
            "example": {"setting": self.example.setting},
            "agent": self.agent.to_dict(),
        }


_config: AppConfig | None = None


def init() -> AppConfig:
    """Load the config file once and cache it.

    A missing file yields the defaults; a malformed one raises ConfigParseError.
    """
    global _config
    if _config is not None:
        return _config

    path = paths.config_file()
    if path.exists():
        try:
            with path.open("rb") as handle:
                cfg = AppConfig.from_dict(tomllib.load(handle))
        except (OSError, ValueError) as exc:
            raise ConfigParseError(exc) from exc
    else:
        cfg = AppConfig()

    _config = cfg
    return cfg


def get() -> AppConfig:
    """Return the cached config; :func:`init` must have been called."""
    if _config is None:
        raise RuntimeError("app config init() must be called before get()")
    return _config


def save(cfg: AppConfig) -> None:
    """Write ``cfg`` to the config file, creating its directory."""
    path = paths.config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(cfg.to_dict()), encoding="utf-8")


def reset() -> AppConfig | None:
    """Forget the cached config and return the one that was cached."""
    global _config
    previous, _config = _config, None
    return previous