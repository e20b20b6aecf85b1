"""Tests for wot_meta.server."""

from __future__ import annotations

import asyncio
import io
import json
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from wot_meta.component_map import ComponentEntry
from wot_meta.errors import FetchError
from wot_meta.registry import ComponentRegistry
from wot_meta.server import TOOLS, ToolServer, main


@pytest.fixture
def server(docs_dir: Path) -> ToolServer:
    registry = ComponentRegistry([ComponentEntry("wd-button"), ComponentEntry("wd-circle")], docs_dir=docs_dir)
    return ToolServer(registry)


def call(server: ToolServer, tool: str, **arguments):
    return server.process_request({"jsonrpc": "2.0", "id": 1, "method": "tools/call",
                                   "params": {"name": tool, "arguments": arguments}})


def test_tools_list(server: ToolServer) -> None:
    resp = server.process_request({"jsonrpc": "2.0", "id": 7, "method": "tools/list"})

    assert resp["id"] == 7
    assert [t["name"] for t in resp["result"]["tools"]] == list(TOOLS)


def test_list_components_loads_registry_lazily(server: ToolServer) -> None:
    assert not server.registry.loaded
    assert call(server, "list_components")["result"]["content"] == ["wd-button", "wd-circle"]
    assert server.registry.loaded


def test_get_component(server: ToolServer) -> None:
    content = call(server, "get_component", name="button")["result"]["content"]

    assert content["name"] == "wd-button"
    assert content["docUrl"] == "https://wot-design-uni.cn/component/button.html"
    assert content["externalClasses"][0]["name"] == "custom-class"


def test_get_component_errors(server: ToolServer) -> None:
    assert call(server, "get_component")["result"]["content"] == {"error": "Component name not provided in arguments"}
    assert "not found" in call(server, "get_component", name="nope")["result"]["content"]["error"]


def test_get_component_props(server: ToolServer) -> None:
    content = call(server, "get_component_props", name="wd-circle")["result"]["content"]

    assert content["component"] == "wd-circle"
    assert content["count"] == len(content["props"])
    assert content["props"][0]["name"] == "v-model"


def test_search_components(server: ToolServer) -> None:
    assert call(server, "search_components", query="circ")["result"]["content"] == ["wd-circle"]


def test_find_attribute(server: ToolServer) -> None:
    prop = call(server, "find_attribute", name="wd-button", attr="openType")["result"]["content"]
    event = call(server, "find_attribute", name="wd-button", attr="click", event=True)["result"]["content"]
    external = call(server, "find_attribute", name="wd-button", attr="custom-style")["result"]["content"]

    assert prop["name"] == "open-type"
    assert event == {"name": "click", "description": "点击事件"}
    assert external["name"] == "custom-style"
    assert "error" in call(server, "find_attribute", name="wd-button", attr="nope")["result"]["content"]


def test_unknown_tool_and_method(server: ToolServer) -> None:
    assert call(server, "export_all")["error"]["code"] == -32601
    resp = server.process_request({"jsonrpc": "2.0", "id": 2, "method": "resources/list"})
    assert resp["error"]["code"] == -32601


def test_internal_errors_are_reported(server: ToolServer, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(params):
        raise RuntimeError("kaput")

    monkeypatch.setattr(server, "handle_get_component", boom)
    resp = call(server, "get_component", name="button")

    assert resp["error"]["code"] == -32603
    assert "kaput" in resp["error"]["message"]


def test_handle_line(server: ToolServer) -> None:
    assert server.handle_line("   ") is None
    assert server.handle_line("{not json")["error"]["code"] == -32700
    assert server.handle_line("[1, 2]")["error"]["code"] == -32600


@pytest.mark.parametrize(
    "params",
    [["x"], "get_component", {"name": "get_component", "arguments": ["button"]}, {"name": ["get_component"]}],
)
def test_malformed_params_are_rejected(server: ToolServer, params) -> None:
    resp = server.process_request({"jsonrpc": "2.0", "id": 4, "method": "tools/call", "params": params})

    assert resp["id"] == 4
    assert resp["error"]["code"] in (-32602, -32601)


def test_malformed_params_do_not_stop_the_loop(server: ToolServer, capsys: pytest.CaptureFixture) -> None:
    stream = io.StringIO('{"id": 1, "method": "tools/call", "params": ["x"]}\n{"id": 2, "method": "tools/list"}\n')
    server.serve(stream)

    first, second = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert first["error"] == {"code": -32602, "message": "Invalid params"}
    assert second["id"] == 2
    assert "tools" in second["result"]


def test_serve_writes_one_line_per_request(server: ToolServer, capsys: pytest.CaptureFixture) -> None:
    stream = io.StringIO('{"id": 1, "method": "tools/list"}\n\n{"id": 2, "method": "nope"}\n')
    server.serve(stream)

    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line)["id"] for line in lines] == [1, 2]


def test_main_once(docs_dir: Path, capsys: pytest.CaptureFixture) -> None:
    request = json.dumps({"id": 3, "method": "tools/call",
                          "params": {"name": "get_component_props", "arguments": {"name": "circle"}}})
    main(["--once", request, "--docs-dir", str(docs_dir)])

    out = json.loads(capsys.readouterr().out)
    assert out["result"]["content"]["component"] == "wd-circle"


def test_online_registry_loads_pages_concurrently(docs_dir: Path) -> None:
    entries = [ComponentEntry(f"wd-{name}") for name in
               ("button", "circle", "table", "action-sheet", "a", "b", "c", "d", "e", "f")]
    server = ToolServer(ComponentRegistry(entries, online=True, docs_dir=docs_dir))

    async def unreachable(url, *, timeout=None, client=None):
        await asyncio.sleep(0.2)
        raise FetchError(f"Failed {url}")

    with patch("wot_meta.fetcher.fetch_url_async", side_effect=unreachable) as mock_fetch:
        started = time.perf_counter()
        tags = server.handle_list_components({})
        elapsed = time.perf_counter() - started

    assert mock_fetch.call_count == 10
    assert elapsed < 1.0
    assert len(tags) == 10
    assert server.registry.find_prop("wd-button", "openType").name == "open-type"


def test_online_help_mentions_bundled_sample(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit):
        main(["--help"])
    assert "Only a sample of pages is bundled" in capsys.readouterr().out
