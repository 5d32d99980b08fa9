"""
premiere-mcp Configuration — Unified settings for the MCP server

Load order: env vars > ~/.premiere-mcp/config.env > defaults
"""

import os
import tempfile
from pathlib import Path


def _load_config_env():
    """Load key=value pairs from ~/.premiere-mcp/config.env if it exists."""
    config_file = Path.home() / ".premiere-mcp" / "config.env"
    if not config_file.exists():
        return
    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


# Load config.env before reading env vars
_load_config_env()


class Config:
    # Server identity
    SERVER_NAME = "premiere-mcp"
    SERVER_VERSION = "0.1.0"
    PROTOCOL_VERSION = "2024-11-05"

    # Paths
    DATA_DIR = Path(os.environ.get("PREMIERE_MCP_DATA_DIR", str(Path.home() / ".premiere-mcp")))
    LOG_DIR = DATA_DIR / "logs"

    # Logging (NEVER to stdout — would corrupt MCP protocol)
    LOG_LEVEL = os.environ.get("PREMIERE_MCP_LOG_LEVEL", "INFO").upper()
    LOG_FILE = LOG_DIR / "premiere-mcp.log"
    ERROR_LOG = LOG_DIR / "premiere-mcp-errors.log"

    # Bridge: the CEP/UXP panel watches the same folder
    BRIDGE_DIR = Path(os.environ.get(
        "PREMIERE_MCP_BRIDGE_DIR",
        str(Path(tempfile.gettempdir()) / "premiere-bridge"),
    ))
    BRIDGE_TIMEOUT = float(os.environ.get("PREMIERE_MCP_BRIDGE_TIMEOUT", "30"))
    BRIDGE_POLL_INTERVAL = float(os.environ.get("PREMIERE_MCP_BRIDGE_POLL", "0.1"))

    @classmethod
    def ensure_dirs(cls):
        """Create required directories."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
