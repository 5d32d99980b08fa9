"""Tests for the file-based Premiere Pro bridge."""

import asyncio
import json

import pytest
import pytest_asyncio

from premiere_mcp.bridge import (
    BridgeError,
    BridgeNotInitializedError,
    BridgeTimeoutError,
    PremiereBridge,
    js,
)


async def _answer(bridge_dir, payload, raw=None):
    """Play the panel: wait for one command file and write its response."""
    while True:
        commands = list(bridge_dir.glob("command-*.json"))
        if commands:
            break
        await asyncio.sleep(0.01)
    command = json.loads(commands[0].read_text())
    response = bridge_dir / f"response-{command['id']}.json"
    response.write_text(raw if raw is not None else json.dumps(payload))
    return command


@pytest_asyncio.fixture
async def bridge(tmp_path):
    b = PremiereBridge(bridge_dir=tmp_path / "bridge", timeout=2, poll_interval=0.01)
    await b.initialize()
    return b


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_creates_directory(self, tmp_path):
        b = PremiereBridge(bridge_dir=tmp_path / "bridge")
        assert not b.initialized
        await b.initialize()
        assert b.initialized
        assert (tmp_path / "bridge").is_dir()

    @pytest.mark.asyncio
    async def test_execute_before_initialize(self, tmp_path):
        b = PremiereBridge(bridge_dir=tmp_path / "bridge")
        with pytest.raises(BridgeNotInitializedError):
            await b.execute_script("1;")

    @pytest.mark.asyncio
    async def test_cleanup_removes_leftovers(self, tmp_path):
        b = PremiereBridge(bridge_dir=tmp_path / "bridge")
        await b.initialize()
        (tmp_path / "bridge" / "command-stale.json").write_text("{}")
        (tmp_path / "bridge" / "response-stale.json").write_text("{}")
        (tmp_path / "bridge" / "notes.txt").write_text("keep")

        await b.cleanup()

        assert sorted(p.name for p in (tmp_path / "bridge").iterdir()) == ["notes.txt"]
        assert not b.initialized


class TestExecuteScript:
    @pytest.mark.asyncio
    async def test_round_trip(self, bridge):
        panel = asyncio.create_task(_answer(
            bridge.bridge_dir,
            {"success": True, "result": json.dumps({"name": "Demo"}), "timestamp": "now"},
        ))
        result = await bridge.execute_script("app.project.name;")
        command = await panel

        assert result == {"name": "Demo"}
        assert command["script"] == "app.project.name;"
        assert "timestamp" in command
        assert list(bridge.bridge_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_non_json_result_string(self, bridge):
        panel = asyncio.create_task(_answer(bridge.bridge_dir, {"success": True, "result": "done"}))
        assert await bridge.execute_script("1;") == "done"
        await panel

    @pytest.mark.asyncio
    async def test_panel_error(self, bridge):
        panel = asyncio.create_task(_answer(bridge.bridge_dir, {"success": False, "error": "Script validation failed"}))
        with pytest.raises(BridgeError, match="Script validation failed"):
            await bridge.execute_script("1;")
        await panel
        assert list(bridge.bridge_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_partial_write_is_retried(self, bridge):
        async def panel():
            command = await _answer(bridge.bridge_dir, None, raw='{"success": tr')
            await asyncio.sleep(0.05)
            (bridge.bridge_dir / f"response-{command['id']}.json").write_text(
                json.dumps({"success": True, "result": "{\"ok\": true}"})
            )

        task = asyncio.create_task(panel())
        assert await bridge.execute_script("1;") == {"ok": True}
        await task

    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path):
        b = PremiereBridge(bridge_dir=tmp_path / "bridge", timeout=0.05, poll_interval=0.01)
        await b.initialize()
        with pytest.raises(BridgeTimeoutError, match="No response from Premiere Pro"):
            await b.execute_script("1;")
        assert list((tmp_path / "bridge").iterdir()) == []

    @pytest.mark.asyncio
    async def test_concurrent_commands_use_distinct_files(self, bridge):
        async def panel():
            answered = set()
            while len(answered) < 2:
                for command_file in bridge.bridge_dir.glob("command-*.json"):
                    command_id = command_file.stem[len("command-"):]
                    if command_id in answered:
                        continue
                    command = json.loads(command_file.read_text())
                    answered.add(command_id)
                    (bridge.bridge_dir / f"response-{command['id']}.json").write_text(
                        json.dumps({"success": True, "result": command["script"]})
                    )
                await asyncio.sleep(0.01)

        task = asyncio.create_task(panel())
        first, second = await asyncio.gather(bridge.execute_script("'a';"), bridge.execute_script("'b';"))
        await task
        assert (first, second) == ("'a';", "'b';")


class TestUnwrap:
    def test_result_json_string(self):
        assert PremiereBridge._unwrap({"success": True, "result": "[1, 2]"}) == [1, 2]

    def test_result_object(self):
        assert PremiereBridge._unwrap({"success": True, "result": {"a": 1}}) == {"a": 1}

    def test_error_without_success(self):
        with pytest.raises(BridgeError, match="boom"):
            PremiereBridge._unwrap({"error": "boom", "timestamp": "now"})

    def test_no_result_key(self):
        assert PremiereBridge._unwrap({"success": True}) == {"success": True}

    def test_non_dict(self):
        assert PremiereBridge._unwrap([1]) == [1]


class TestHelpers:
    def test_js_literals(self):
        assert js("C:\\Media\\clip \"1\".mov") == '"C:\\\\Media\\\\clip \\"1\\".mov"'
        assert js(None) == "null"
        assert js(True) == "true"
        assert js(2.5) == "2.5"

    @pytest.mark.asyncio
    async def test_list_project_items_failure(self, bridge):
        panel = asyncio.create_task(_answer(
            bridge.bridge_dir, {"success": True, "result": json.dumps({"ok": False, "error": "No project"})},
        ))
        with pytest.raises(BridgeError, match="No project"):
            await bridge.list_project_items()
        await panel

    @pytest.mark.asyncio
    async def test_create_project_script(self, bridge):
        panel = asyncio.create_task(_answer(bridge.bridge_dir, {"success": True, "result": "{}"}))
        await bridge.create_project("Demo", "/Users/me/Projects/")
        command = await panel
        assert 'app.newProject("/Users/me/Projects/Demo.prproj")' in command["script"]
