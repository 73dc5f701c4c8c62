"""Error types reported by the example application."""

from __future__ import annotations


class AppError(Exception):
    """Base class for every error the application reports to the user."""

    prefix = ""

    def __init__(self, detail: object) -> None:
        super().__init__(str(detail))
        self.message = str(detail)

    def __str__(self) -> str:
        return f"{self.prefix}{self.message}"


class ConfigError(AppError):
    """A configuration key or value was rejected."""

    prefix = "config error: "


class ConfigParseError(AppError):
    """The configuration file could not be read or parsed."""

    prefix = "config parse error: "


class PathResolutionError(AppError):
    """The data directory could not be determined."""

    prefix = "path resolution failed: "


class AgentExecutionError(AppError):
    """The agent process could not be run."""

    prefix = "agent execution failed: "


class AgentBackendError(AppError):
    """No usable agent backend could be built from the configuration."""

    prefix = "agent backend error: "


class HttpError(AppError):
    """An HTTP request failed."""

    prefix = "HTTP error: "