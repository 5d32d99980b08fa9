"""Tests for premiere-mcp configuration."""

import os
from pathlib import Path

from premiere_mcp import config


class TestConfig:
    def test_defaults(self):
        from premiere_mcp.config import Config
        assert Config.SERVER_NAME == "premiere-mcp"
        assert Config.SERVER_VERSION == "0.1.0"
        assert Config.PROTOCOL_VERSION == "2024-11-05"

    def test_bridge_defaults(self):
        from premiere_mcp.config import Config
        if "PREMIERE_MCP_BRIDGE_TIMEOUT" not in os.environ:
            assert Config.BRIDGE_TIMEOUT == 30.0
        if "PREMIERE_MCP_BRIDGE_POLL" not in os.environ:
            assert Config.BRIDGE_POLL_INTERVAL == 0.1
        assert "premiere-bridge" in str(Config.BRIDGE_DIR) or "PREMIERE_MCP_BRIDGE_DIR" in os.environ

    def test_data_dir_default(self):
        from premiere_mcp.config import Config
        assert ".premiere-mcp" in str(Config.DATA_DIR) or "PREMIERE_MCP_DATA_DIR" in os.environ

    def test_log_files_live_under_log_dir(self):
        from premiere_mcp.config import Config
        assert Config.LOG_FILE.parent == Config.LOG_DIR
        assert Config.ERROR_LOG.parent == Config.LOG_DIR

    def test_ensure_dirs(self, tmp_data_dir):
        from premiere_mcp.config import Config
        Config.ensure_dirs()
        assert Config.DATA_DIR.exists()
        assert Config.LOG_DIR.exists()

    def test_ensure_dirs_creates_missing(self, tmp_path):
        from premiere_mcp.config import Config
        original_data, original_logs = Config.DATA_DIR, Config.LOG_DIR
        Config.DATA_DIR = tmp_path / "custom"
        Config.LOG_DIR = Config.DATA_DIR / "logs"
        try:
            Config.ensure_dirs()
            assert Config.DATA_DIR.exists()
            assert Config.LOG_DIR.exists()
        finally:
            Config.DATA_DIR, Config.LOG_DIR = original_data, original_logs


class TestConfigEnvLoading:
    def _load(self, monkeypatch, home: Path):
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
        config._load_config_env()

    def test_loads_key_values(self, tmp_path, monkeypatch):
        (tmp_path / ".premiere-mcp").mkdir()
        (tmp_path / ".premiere-mcp" / "config.env").write_text(
            "# Comment line\n"
            "PREMIERE_MCP_TEST_VAR=hello_world\n"
            "\n"
            "PREMIERE_MCP_TEST_QUOTED=\"quoted value\"\n"
        )
        monkeypatch.delenv("PREMIERE_MCP_TEST_VAR", raising=False)
        monkeypatch.delenv("PREMIERE_MCP_TEST_QUOTED", raising=False)

        self._load(monkeypatch, tmp_path)

        assert os.environ.get("PREMIERE_MCP_TEST_VAR") == "hello_world"
        assert os.environ.get("PREMIERE_MCP_TEST_QUOTED") == "quoted value"

    def test_env_vars_win(self, tmp_path, monkeypatch):
        (tmp_path / ".premiere-mcp").mkdir()
        (tmp_path / ".premiere-mcp" / "config.env").write_text("PREMIERE_MCP_TEST_VAR=from_file\n")
        monkeypatch.setenv("PREMIERE_MCP_TEST_VAR", "from_env")

        self._load(monkeypatch, tmp_path)

        assert os.environ["PREMIERE_MCP_TEST_VAR"] == "from_env"

    def test_missing_file_is_ignored(self, tmp_path, monkeypatch):
        self._load(monkeypatch, tmp_path)
