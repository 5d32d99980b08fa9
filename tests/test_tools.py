"""Tests for the Premiere Pro tool set."""

import re

import pytest

from premiere_mcp.bridge import BridgeError
from premiere_mcp.registry.results import FailureKind, Success
from premiere_mcp.tools import ALL_TOOLS, MODULES, build_dispatcher
from premiere_mcp.tools.effect_tools import LUMETRI_PROPERTIES
from premiere_mcp.tools.export_tools import default_preset
from premiere_mcp.tools.scripting import PRELUDE, merged, unsupported, wrap

from conftest import FakeBridge

# Tokens the bridge panel refuses to run
FORBIDDEN = [
    re.compile(r"eval\s*\(", re.I),
    re.compile(r"Function\s*\(", re.I),
    re.compile(r"require\s*\(", re.I),
    re.compile(r"import\s+", re.I),
    re.compile(r"__dirname"),
    re.compile(r"__filename"),
    re.compile(r"process\.", re.I),
    re.compile(r"child_process"),
]

UNSUPPORTED = {
    "set_sequence_settings",
    "create_nested_sequence",
    "unnest_sequence",
    "replace_clip",
    "set_clip_properties",
    "get_render_queue_status",
}


def _sample(schema):
    """Smallest value satisfying a wire schema property."""
    if "enum" in schema:
        return schema["enum"][0]
    kind = schema.get("type")
    if kind == "string":
        return "item-1"
    if kind in ("number", "integer"):
        return 1
    if kind == "boolean":
        return True
    if kind == "array":
        return []
    if kind == "object":
        return {name: _sample(schema["properties"][name]) for name in schema.get("required", [])}
    return "item-1"


def _minimal_arguments(tool):
    return _sample(tool["inputSchema"])


@pytest.fixture
def bridge():
    return FakeBridge()


@pytest.fixture
def dispatcher(bridge, tmp_data_dir):
    return build_dispatcher(bridge)


class TestCatalog:
    def test_fifty_five_unique_tools(self):
        names = [definition.name for definition in ALL_TOOLS]
        assert len(names) == 55
        assert len(set(names)) == 55

    def test_module_handlers_match_definitions(self):
        for module in MODULES:
            assert [d.name for d in module.TOOLS] == list(module.HANDLERS), module.__name__

    def test_every_tool_is_described(self, dispatcher):
        for tool in dispatcher.list_operations():
            assert tool["description"], tool["name"]
            assert tool["inputSchema"]["type"] == "object"

    def test_defaults_advertised(self, dispatcher):
        tools = {t["name"]: t for t in dispatcher.list_operations()}
        assert tools["export_frame"]["inputSchema"]["properties"]["format"]["default"] == "png"
        assert tools["import_folder"]["inputSchema"]["properties"]["recursive"]["default"] is False


class TestEveryTool:
    @pytest.mark.asyncio
    async def test_dispatches_with_minimal_arguments(self, dispatcher, bridge):
        for tool in dispatcher.list_operations():
            before = len(bridge.scripts)
            result = await dispatcher.dispatch(tool["name"], _minimal_arguments(tool))
            assert isinstance(result, Success), f"{tool['name']}: {getattr(result, 'message', '')}"
            if tool["name"] in UNSUPPORTED:
                assert len(bridge.scripts) == before, tool["name"]
            else:
                assert len(bridge.scripts) > before, tool["name"]

    @pytest.mark.asyncio
    async def test_generated_scripts_pass_panel_checks(self, dispatcher, bridge):
        for tool in dispatcher.list_operations():
            await dispatcher.dispatch(tool["name"], _minimal_arguments(tool))
        assert bridge.scripts
        for script in bridge.scripts:
            for pattern in FORBIDDEN:
                assert not pattern.search(script), pattern.pattern
            assert len(script) < 500000

    @pytest.mark.asyncio
    async def test_missing_required_argument(self, dispatcher, bridge):
        result = await dispatcher.dispatch("create_project", {"location": "/tmp"})
        assert result.kind is FailureKind.VALIDATION_ERROR
        assert bridge.scripts == []


class TestProjectTools:
    @pytest.mark.asyncio
    async def test_create_project(self, dispatcher, bridge):
        bridge.queue({"id": "doc-1", "name": "Demo", "path": "/tmp/Demo.prproj"})
        result = await dispatcher.dispatch("create_project", {"name": "Demo", "location": "/tmp"})
        assert result.payload["success"] is True
        assert result.payload["projectPath"] == "/tmp/Demo.prproj"
        assert result.payload["id"] == "doc-1"
        assert 'app.newProject("/tmp/Demo.prproj")' in bridge.last_script

    @pytest.mark.asyncio
    async def test_arguments_are_escaped(self, dispatcher, bridge):
        await dispatcher.dispatch("create_bin", {"name": 'B-roll "day 2"'})
        assert 'createBin("B-roll \\"day 2\\"")' in bridge.last_script

    @pytest.mark.asyncio
    async def test_script_failure_payload_is_returned(self, dispatcher, bridge):
        bridge.queue({"success": False, "error": "Folder not found"})
        result = await dispatcher.dispatch("import_folder", {"folderPath": "/missing"})
        assert isinstance(result, Success)
        assert result.payload == {"success": False, "error": "Folder not found"}

    @pytest.mark.asyncio
    async def test_bridge_error_is_execution_error(self, dispatcher, bridge):
        bridge.queue(BridgeError("No response from Premiere Pro after 30s"))
        result = await dispatcher.dispatch("list_sequences", {})
        assert result.kind is FailureKind.EXECUTION_ERROR

        bridge.queue({"success": True, "sequences": [], "count": 0})
        following = await dispatcher.dispatch("list_sequences", {})
        assert following.payload["count"] == 0


class TestSequenceTools:
    @pytest.mark.asyncio
    async def test_marker_color(self, dispatcher, bridge):
        await dispatcher.dispatch("add_marker", {"sequenceId": "s1", "time": 5, "name": "Beat", "color": "green"})
        assert "marker.setColorByIndex(3)" in bridge.last_script

    @pytest.mark.asyncio
    async def test_unsupported_settings(self, dispatcher, bridge):
        result = await dispatcher.dispatch("set_sequence_settings", {"sequenceId": "s1", "settings": {}})
        assert result.payload["success"] is False
        assert "set_sequence_settings" in result.payload["error"]
        assert result.payload["note"]


class TestClipTools:
    @pytest.mark.asyncio
    async def test_add_to_timeline_defaults(self, dispatcher, bridge):
        result = await dispatcher.dispatch("add_to_timeline", {
            "sequenceId": "s1", "projectItemId": "p1", "trackIndex": 0, "time": 2.5,
        })
        assert result.payload["insertMode"] == "overwrite"
        assert "track.insertClip(projectItem, 2.5)" in bridge.last_script

    @pytest.mark.asyncio
    async def test_reverse_clip_uses_negative_speed(self, dispatcher, bridge):
        await dispatcher.dispatch("reverse_clip", {"clipId": "c1"})
        assert "qeClip.setSpeed(-1.0, true)" in bridge.last_script

    @pytest.mark.asyncio
    async def test_trim_only_touches_given_points(self, dispatcher, bridge):
        await dispatcher.dispatch("trim_clip", {"clipId": "c1", "inPoint": 1.5})
        assert "clip.inPoint = __time(1.5);" in bridge.last_script
        assert "clip.outPoint = __time(" not in bridge.last_script


class TestEffectAndExportTools:
    def test_lumetri_properties(self):
        assert LUMETRI_PROPERTIES

    def test_default_preset(self):
        assert default_preset("mp4") == "H.264"
        assert default_preset("mov") == "ProRes"
        assert default_preset(None) == "ProRes"

    @pytest.mark.asyncio
    async def test_export_sequence(self, dispatcher, bridge):
        result = await dispatcher.dispatch("export_sequence", {
            "sequenceId": "s1", "outputPath": "/out/final.mp4", "format": "mp4",
        })
        assert result.payload["format"] == "H.264"
        assert 'encodeSequence(sequence, "/out/final.mp4", "H.264"' in bridge.last_script

    @pytest.mark.asyncio
    async def test_export_failure_then_recovery(self, dispatcher, bridge):
        bridge.queue(BridgeError("Encoder unavailable"))
        failed = await dispatcher.dispatch("export_sequence", {"sequenceId": "s1", "outputPath": "/out.mp4"})
        assert failed.kind is FailureKind.EXECUTION_ERROR
        assert failed.message == "Encoder unavailable"

        listed = await dispatcher.dispatch("list_sequences", {})
        assert isinstance(listed, Success)


class TestScripting:
    def test_wrap_is_a_named_function(self):
        script = wrap("return 1;")
        assert script.startswith("(function __mcpCommand() {")
        assert script.endswith("})();")
        assert PRELUDE in script

    def test_wrap_error_prefix(self):
        assert '"QE DOM error: " + e.toString()' in wrap("return 1;", error_prefix="QE DOM error: ")

    def test_merged(self):
        assert merged({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}
        assert merged({"a": 1}, "done") == {"a": 1, "result": "done"}
        assert merged({"a": 1}, None) == {"a": 1}

    def test_unsupported(self):
        payload = unsupported("replace_clip", "not possible", "do it by hand")
        assert payload == {"success": False, "error": "replace_clip: not possible", "note": "do it by hand"}
