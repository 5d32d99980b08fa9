"""premiere-mcp — Model Context Protocol server for Adobe Premiere Pro."""

__version__ = "0.1.0"
