"""Uniform JSON envelope for agent-friendly command output."""

from __future__ import annotations

import dataclasses
import enum
import json
import sys
from dataclasses import dataclass
from typing import Any


def _plain(value: Any) -> Any:
    """Turn ``value`` into something the json module can serialise."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, enum.Enum):
        return _plain(value.value)
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


@dataclass(frozen=True)
class AgentResponse:
    """Either ``{"ok": true, "data": ...}`` or ``{"ok": false, "error": ..., "suggestion": ...}``.

    JSON goes to stdout; human-readable text belongs on stderr.
    """

    succeeded: bool
    data: Any = None
    error: str | None = None
    suggestion: str | None = None

    @classmethod
    def ok(cls, data: Any) -> AgentResponse:
        """Create a success response wrapping ``data``."""
        return cls(succeeded=True, data=data)

    @classmethod
    def err(cls, error: str, suggestion: str | None = None) -> AgentResponse:
        """Create an error response with an optional hint for self-correction."""
        return cls(
            succeeded=False,
            error=str(error),
            suggestion=None if suggestion is None else str(suggestion),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the response as plain JSON-compatible data."""
        if self.succeeded:
            return {"ok": True, "data": _plain(self.data)}
        return {"ok": False, "error": self.error, "suggestion": self.suggestion}

    def to_json(self) -> str:
        """Serialise the response as compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def print(self) -> None:
        """Write the JSON form to stdout, followed by a newline."""
        sys.stdout.write(self.to_json() + "\n")
        sys.stdout.flush()