import json
from dataclasses import dataclass

from cliforge.describe.response import AgentResponse


@dataclass
class MyResult:
    url: str


def test_ok_response_serializes_correctly():
    resp = AgentResponse.ok(MyResult(url="https://example.com"))
    data = json.loads(resp.to_json())

    assert data["ok"] is True
    assert data["data"]["url"] == "https://example.com"
    assert "error" not in data


def test_ok_response_exact_json():
    resp = AgentResponse.ok(MyResult(url="https://example.com"))
    assert resp.to_json() == '{"ok":true,"data":{"url":"https://example.com"}}'


def test_err_response_serializes_correctly():
    resp = AgentResponse.err("not found", "try `mycli list`")
    data = json.loads(resp.to_json())

    assert data["ok"] is False
    assert data["error"] == "not found"
    assert data["suggestion"] == "try `mycli list`"


def test_err_response_without_suggestion():
    resp = AgentResponse.err("failed", None)
    data = json.loads(resp.to_json())

    assert data["ok"] is False
    assert data["error"] == "failed"
    assert data["suggestion"] is None


def test_err_response_exact_json():
    assert AgentResponse.err("failed").to_json() == (
        '{"ok":false,"error":"failed","suggestion":null}'
    )


def test_ok_with_plain_dict_and_nested_values():
    resp = AgentResponse.ok({"entries": {"a": "1"}, "items": (1, 2)})
    assert resp.to_dict() == {"ok": True, "data": {"entries": {"a": "1"}, "items": [1, 2]}}


def test_ok_with_none_data():
    assert AgentResponse.ok(None).to_json() == '{"ok":true,"data":null}'


def test_non_ascii_is_kept():
    assert AgentResponse.err("échec").to_json() == '{"ok":false,"error":"échec","suggestion":null}'


def test_print_writes_json_line(capsys):
    AgentResponse.ok({"greeting": "Hello, Alice!"}).print()
    out = capsys.readouterr().out
    assert out == '{"ok":true,"data":{"greeting":"Hello, Alice!"}}\n'