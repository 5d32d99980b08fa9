"""
Premiere Pro Bridge — file-based command queue to the CEP/UXP panel

The panel running inside Premiere watches BRIDGE_DIR. For each call:

  1. we write   command-<id>.json   {"id", "script", "timestamp"}
  2. the panel runs the ExtendScript and writes
                response-<id>.json  {"success", "result" | "error", "timestamp"}
  3. we read the response, delete both files, and unwrap "result"

The bridge owns the timeout policy; the dispatcher never times calls out.
"""

import asyncio
import json
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from premiere_mcp.config import Config
from premiere_mcp.server.logger import get_logger

log = get_logger("bridge")

INSTALL_PATHS = (
    "/Applications/Adobe Premiere Pro 2025/Adobe Premiere Pro 2025.app",
    "/Applications/Adobe Premiere Pro 2024/Adobe Premiere Pro 2024.app",
    "/Applications/Adobe Premiere Pro 2023/Adobe Premiere Pro 2023.app",
    "C:\\Program Files\\Adobe\\Adobe Premiere Pro 2025\\Adobe Premiere Pro.exe",
    "C:\\Program Files\\Adobe\\Adobe Premiere Pro 2024\\Adobe Premiere Pro.exe",
    "C:\\Program Files\\Adobe\\Adobe Premiere Pro 2023\\Adobe Premiere Pro.exe",
)


class BridgeError(Exception):
    """Premiere could not run a script, or reported a failure running it."""


class BridgeNotInitializedError(BridgeError):
    pass


class BridgeTimeoutError(BridgeError):
    pass


def js(value: Any) -> str:
    """Render a Python value as an ExtendScript literal."""
    return json.dumps(value)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PremiereBridge:
    """Sends ExtendScript to Premiere Pro and returns the parsed result."""

    def __init__(
        self,
        bridge_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ):
        self.bridge_dir = Path(bridge_dir or Config.BRIDGE_DIR)
        self.timeout = Config.BRIDGE_TIMEOUT if timeout is None else timeout
        self.poll_interval = Config.BRIDGE_POLL_INTERVAL if poll_interval is None else poll_interval
        self.install_path: Optional[str] = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        self.bridge_dir.mkdir(parents=True, exist_ok=True)
        log.debug(f"Bridge directory: {self.bridge_dir}")

        self.install_path = self._detect_installation()
        if self.install_path:
            log.info(f"Found Adobe Premiere Pro at: {self.install_path}")
        else:
            log.warning("Adobe Premiere Pro installation not found in common paths")

        self._initialized = True
        log.info("Premiere Pro bridge initialized (file communication)")

    @staticmethod
    def _detect_installation() -> Optional[str]:
        for candidate in INSTALL_PATHS:
            if Path(candidate).exists():
                return candidate
        return None

    async def execute_script(self, script: str) -> Any:
        if not self._initialized:
            raise BridgeNotInitializedError("Bridge not initialized. Call initialize() first.")

        command_id = str(uuid.uuid4())
        command_file = self.bridge_dir / f"command-{command_id}.json"
        response_file = self.bridge_dir / f"response-{command_id}.json"

        command_file.write_text(json.dumps({
            "id": command_id,
            "script": script,
            "timestamp": _utc_now(),
        }), encoding="utf-8")

        try:
            response = await self._wait_for_response(response_file)
        finally:
            command_file.unlink(missing_ok=True)
            response_file.unlink(missing_ok=True)

        return self._unwrap(response)

    async def _wait_for_response(self, response_file: Path) -> Any:
        deadline = time.monotonic() + self.timeout
        while time.monotonic() < deadline:
            if response_file.exists():
                try:
                    return json.loads(response_file.read_text(encoding="utf-8"))
                except json.JSONDecodeError:
                    # panel may still be writing
                    pass
            await asyncio.sleep(self.poll_interval)
        raise BridgeTimeoutError(
            f"No response from Premiere Pro after {self.timeout:g}s "
            f"(is the bridge panel open and watching {self.bridge_dir}?)"
        )

    @staticmethod
    def _unwrap(response: Any) -> Any:
        if not isinstance(response, dict):
            return response

        if "error" in response and response.get("success") is not True:
            raise BridgeError(str(response["error"]))

        if "result" not in response:
            return response

        result = response["result"]
        if isinstance(result, str):
            try:
                return json.loads(result)
            except json.JSONDecodeError:
                return result
        return result

    # -- convenience operations used by the tool handlers --

    async def create_project(self, name: str, location: str) -> Dict[str, Any]:
        return await self.execute_script(f"""
            app.newProject({js(location.rstrip('/') + '/' + name + '.prproj')});
            var project = app.project;
            JSON.stringify({{
                id: project.documentID,
                name: project.name,
                path: project.path,
                isOpen: true,
                sequences: [],
                projectItems: []
            }});
        """)

    async def open_project(self, path: str) -> Dict[str, Any]:
        return await self.execute_script(f"""
            app.openDocument({js(path)});
            var project = app.project;
            JSON.stringify({{
                id: project.documentID,
                name: project.name,
                path: project.path,
                isOpen: true,
                sequences: [],
                projectItems: []
            }});
        """)

    async def save_project(self) -> Any:
        return await self.execute_script("""
            app.project.save();
            JSON.stringify({ success: true });
        """)

    async def import_media(self, file_path: str) -> Dict[str, Any]:
        return await self.execute_script(f"""
            var ok = app.project.importFiles([{js(file_path)}], true, app.project.rootItem, false);
            var root = app.project.rootItem;
            var item = root.children[root.children.numItems - 1];
            JSON.stringify({{
                success: ok,
                id: item ? item.nodeId : null,
                name: item ? item.name : null,
                mediaPath: item ? item.getMediaPath() : {js(file_path)}
            }});
        """)

    async def create_sequence(self, name: str, preset_path: Optional[str] = None) -> Dict[str, Any]:
        return await self.execute_script(f"""
            var sequence = app.project.createNewSequence({js(name)}, {js(preset_path or '')});
            JSON.stringify({{
                id: sequence.sequenceID,
                name: sequence.name,
                duration: sequence.end - sequence.zeroPoint,
                frameRate: sequence.timebase,
                videoTracks: [],
                audioTracks: []
            }});
        """)

    async def add_to_timeline(self, sequence_id: str, project_item_id: str,
                              track_index: int, time_seconds: float) -> Dict[str, Any]:
        return await self.execute_script(f"""
            var sequence = app.project.getSequenceByID({js(sequence_id)});
            var projectItem = app.project.getProjectItemByID({js(project_item_id)});
            var track = sequence.videoTracks[{int(track_index)}];
            track.insertClip(projectItem, {float(time_seconds)});
            var clip = track.clips[track.clips.numItems - 1];
            JSON.stringify({{
                id: clip.nodeId,
                name: clip.name,
                inPoint: clip.inPoint.seconds,
                outPoint: clip.outPoint.seconds,
                duration: clip.duration.seconds
            }});
        """)

    async def render_sequence(self, sequence_id: str, output_path: str, preset_path: str) -> Any:
        return await self.execute_script(f"""
            var sequence = app.project.getSequenceByID({js(sequence_id)});
            app.encoder.encodeSequence(sequence, {js(output_path)}, {js(preset_path)},
                app.encoder.ENCODE_ENTIRE, false);
            JSON.stringify({{ success: true }});
        """)

    async def list_project_items(self) -> List[Dict[str, Any]]:
        result = await self.execute_script("""
            try {
                function walk(item) {
                    var results = [];
                    for (var i = 0; i < item.children.numItems; i++) {
                        var child = item.children[i];
                        if (child.type === ProjectItemType.BIN) {
                            results = results.concat(walk(child));
                        } else {
                            results.push({
                                id: child.nodeId,
                                name: child.name,
                                type: child.isSequence() ? 'sequence' : 'footage',
                                mediaPath: child.getMediaPath ? child.getMediaPath() : null
                            });
                        }
                    }
                    return results;
                }
                JSON.stringify({ ok: true, items: walk(app.project.rootItem) });
            } catch (e) {
                JSON.stringify({ ok: false, error: String(e) });
            }
        """)
        if isinstance(result, dict) and result.get("ok"):
            return result.get("items", [])
        error = result.get("error") if isinstance(result, dict) else None
        raise BridgeError(error or "Unknown error listing project items")

    async def cleanup(self):
        """Remove any command/response files left in the bridge directory."""
        if self.bridge_dir.exists():
            for pattern in ("command-*.json", "response-*.json"):
                for leftover in self.bridge_dir.glob(pattern):
                    leftover.unlink(missing_ok=True)
        self._initialized = False
        log.info("Premiere Pro bridge cleaned up")
