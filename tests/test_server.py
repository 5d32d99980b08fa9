"""End-to-end tests for the stdio server loop with injected streams."""

import asyncio
import io
import json

import pytest

from premiere_mcp.registry.dispatcher import Dispatcher, HandlerTable, ToolDefinition, build_tool_catalog
from premiere_mcp.registry.prompts import PromptRegistry
from premiere_mcp.registry.resources import ResourceRegistry
from premiere_mcp.registry.schema import obj, string
from premiere_mcp.server.protocol import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR
from premiere_mcp.server.router import Router
from premiere_mcp.server.server import RawMCPServer
from premiere_mcp.server.transport import RawStdioTransport

from conftest import FakeBridge


def _feed(*messages):
    reader = asyncio.StreamReader()
    for message in messages:
        line = message if isinstance(message, str) else json.dumps(message)
        reader.feed_data(line.encode("utf-8") + b"\n")
    reader.feed_eof()
    return reader


def _responses(writer):
    return [json.loads(line) for line in writer.getvalue().decode("utf-8").splitlines()]


def _router(handlers):
    definitions = [
        ToolDefinition(name, f"{name} tool", obj({"id": string(required=False)}))
        for name in handlers
    ]
    return Router(
        Dispatcher(build_tool_catalog(definitions), HandlerTable(handlers.items())),
        ResourceRegistry([]),
        PromptRegistry([]),
    )


async def _serve(router, *messages, bridge=None):
    writer = io.BytesIO()
    server = RawMCPServer(router, bridge=bridge, transport=RawStdioTransport(_feed(*messages), writer))
    await asyncio.wait_for(server.run(), timeout=10)
    return _responses(writer)


class TestServerLoop:
    @pytest.mark.asyncio
    async def test_handshake_and_call(self, tmp_data_dir):
        responses = await _serve(
            _router({"list_sequences": lambda args: {"success": True, "sequences": []}}),
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2024-11-05"}},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
            {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "list_sequences"}},
        )
        by_id = {r["id"]: r for r in responses}
        assert len(responses) == 3
        assert by_id[1]["result"]["serverInfo"]["name"] == "premiere-mcp"
        assert by_id[2]["result"]["tools"][0]["name"] == "list_sequences"
        assert json.loads(by_id[3]["result"]["content"][0]["text"]) == {"success": True, "sequences": []}

    @pytest.mark.asyncio
    async def test_failures_go_out_as_internal_error(self, tmp_data_dir):
        def explode(args):
            raise RuntimeError("Premiere Pro crashed")

        responses = await _serve(
            _router({"export_sequence": explode, "list_sequences": lambda args: {"ok": True}}),
            {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "nonexistent_tool"}},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "export_sequence"}},
            {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "list_sequences"}},
        )
        by_id = {r["id"]: r for r in responses}
        assert by_id[1]["error"]["code"] == INTERNAL_ERROR
        assert by_id[1]["error"]["data"] == {"kind": "NotFound"}
        assert by_id[2]["error"]["code"] == INTERNAL_ERROR
        assert "Failed to execute tool 'export_sequence'" in by_id[2]["error"]["message"]
        assert "Premiere Pro crashed" in by_id[2]["error"]["message"]
        assert "result" in by_id[3]

    @pytest.mark.asyncio
    async def test_protocol_errors(self, tmp_data_dir):
        responses = await _serve(
            _router({"noop": lambda args: {}}),
            "this is not json",
            {"jsonrpc": "1.0", "id": 7, "method": "ping"},
            {"jsonrpc": "2.0", "id": 8, "method": "unknown/method"},
        )
        assert responses[0]["id"] is None
        assert responses[0]["error"]["code"] == PARSE_ERROR
        by_id = {r["id"]: r for r in responses[1:]}
        assert by_id[7]["error"]["code"] == INVALID_REQUEST
        assert by_id[8]["error"]["code"] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_slow_call_does_not_block_later_requests(self, tmp_data_dir):
        release = asyncio.Event()

        async def slow(args):
            await release.wait()
            return {"done": "slow"}

        async def fast(args):
            release.set()
            return {"done": "fast"}

        responses = await _serve(
            _router({"export_sequence": slow, "list_sequences": fast}),
            {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "export_sequence"}},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "list_sequences"}},
        )
        assert [r["id"] for r in responses] == [2, 1]

    @pytest.mark.asyncio
    async def test_bridge_lifecycle(self, tmp_data_dir):
        bridge = FakeBridge()
        bridge._initialized = False
        initialized = []

        async def initialize():
            initialized.append(True)
            bridge._initialized = True

        bridge.initialize = initialize
        await _serve(_router({"noop": lambda args: {}}), bridge=bridge)

        assert initialized == [True]
        assert not bridge.initialized
