"""Shared fixtures for premiere-mcp tests."""

import os
from typing import Any, List

import pytest

from premiere_mcp.bridge import PremiereBridge


@pytest.fixture
def tmp_data_dir(tmp_path):
    """Point PREMIERE_MCP_DATA_DIR and the bridge folder at a temp directory."""
    data_dir = tmp_path / ".premiere-mcp"
    data_dir.mkdir()
    (data_dir / "logs").mkdir()
    os.environ["PREMIERE_MCP_DATA_DIR"] = str(data_dir)

    from premiere_mcp import config
    saved = {
        name: getattr(config.Config, name)
        for name in ("DATA_DIR", "LOG_DIR", "LOG_FILE", "ERROR_LOG", "BRIDGE_DIR")
    }
    config.Config.DATA_DIR = data_dir
    config.Config.LOG_DIR = data_dir / "logs"
    config.Config.LOG_FILE = data_dir / "logs" / "premiere-mcp.log"
    config.Config.ERROR_LOG = data_dir / "logs" / "premiere-mcp-errors.log"
    config.Config.BRIDGE_DIR = tmp_path / "bridge"

    yield data_dir

    for name, value in saved.items():
        setattr(config.Config, name, value)
    os.environ.pop("PREMIERE_MCP_DATA_DIR", None)


class FakeBridge(PremiereBridge):
    """
    Bridge that never touches the filesystem.

    Records every script it is asked to run and answers with queued
    responses, falling back to {"success": True}. A queued exception is
    raised instead of returned.
    """

    def __init__(self, *responses: Any):
        super().__init__(bridge_dir="unused", timeout=0.1, poll_interval=0.01)
        self._initialized = True
        self.scripts: List[str] = []
        self.responses = list(responses)

    def queue(self, *responses: Any) -> "FakeBridge":
        self.responses.extend(responses)
        return self

    async def execute_script(self, script: str) -> Any:
        self.scripts.append(script)
        response = self.responses.pop(0) if self.responses else {"success": True}
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def last_script(self) -> str:
        return self.scripts[-1]


@pytest.fixture
def fake_bridge():
    return FakeBridge()
