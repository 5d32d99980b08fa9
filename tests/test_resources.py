"""Tests for the resource registry and the Premiere resource set."""

import pytest

from premiere_mcp.bridge import BridgeError
from premiere_mcp.registry.errors import ConfigurationError
from premiere_mcp.registry.resources import ResourceDescriptor, ResourceRegistry
from premiere_mcp.registry.results import FailureKind, Success
from premiere_mcp.resources import RESOURCES, build_resource_registry, read_script

from conftest import FakeBridge

INFO = ResourceDescriptor("premiere://project/info", "Current Project Information", "Open project")
CLIPS = ResourceDescriptor("premiere://timeline/clips", "Timeline Clips")


class TestResourceRegistry:
    def test_lists_in_registration_order(self):
        registry = ResourceRegistry([(INFO, lambda: {}), (CLIPS, lambda: {})])
        listing = registry.list_resources()
        assert [r["uri"] for r in listing] == ["premiere://project/info", "premiere://timeline/clips"]
        assert listing[0] == {
            "uri": "premiere://project/info",
            "name": "Current Project Information",
            "description": "Open project",
            "mimeType": "application/json",
        }
        assert registry.resource_count == 2

    def test_duplicate_uri_rejected(self):
        with pytest.raises(ConfigurationError):
            ResourceRegistry([(INFO, lambda: {}), (INFO, lambda: {})])

    @pytest.mark.asyncio
    async def test_read_success(self):
        async def reader():
            return {"name": "Demo"}

        registry = ResourceRegistry([(INFO, reader)])
        result = await registry.read("premiere://project/info")
        assert isinstance(result, Success)
        assert result.payload == {"name": "Demo"}

    @pytest.mark.asyncio
    async def test_unknown_uri(self):
        registry = ResourceRegistry([(INFO, lambda: {})])
        result = await registry.read("project://current")
        assert result.kind is FailureKind.NOT_FOUND
        assert "project://current" in result.message

    @pytest.mark.asyncio
    async def test_reader_failure(self):
        def reader():
            raise BridgeError("No project open")

        registry = ResourceRegistry([(INFO, reader)])
        result = await registry.read("premiere://project/info")
        assert result.kind is FailureKind.EXECUTION_ERROR
        assert result.message == "No project open"


class TestPremiereResources:
    def test_twelve_unique_uris(self):
        uris = [descriptor.uri for descriptor, _ in RESOURCES]
        assert len(uris) == 12
        assert len(set(uris)) == 12
        assert all(uri.startswith("premiere://") for uri in uris)

    def test_registry_matches_table(self):
        registry = build_resource_registry(FakeBridge())
        assert [r["uri"] for r in registry.list_resources()] == [d.uri for d, _ in RESOURCES]

    @pytest.mark.asyncio
    async def test_read_runs_script_through_bridge(self):
        bridge = FakeBridge({"id": "doc-1", "name": "Demo.prproj"})
        registry = build_resource_registry(bridge)

        result = await registry.read("premiere://project/info")

        assert result.payload == {"id": "doc-1", "name": "Demo.prproj"}
        assert "project.documentID" in bridge.last_script
        assert bridge.last_script.startswith("(function __mcpCommand() {")

    @pytest.mark.asyncio
    async def test_script_failure_is_an_execution_error(self):
        bridge = FakeBridge({"success": False, "error": "Error: no project"})
        registry = build_resource_registry(bridge)

        result = await registry.read("premiere://timeline/clips")

        assert result.kind is FailureKind.EXECUTION_ERROR
        assert "no project" in result.message

    @pytest.mark.asyncio
    async def test_bridge_failure_is_an_execution_error(self):
        bridge = FakeBridge(BridgeError("No response from Premiere Pro after 30s"))
        result = await build_resource_registry(bridge).read("premiere://export/presets")
        assert result.kind is FailureKind.EXECUTION_ERROR

    @pytest.mark.asyncio
    async def test_read_script_passes_other_payloads(self):
        bridge = FakeBridge({"success": True, "markers": []})
        assert await read_script(bridge, "return 1;") == {"success": True, "markers": []}
