"""premiere-mcp server — Raw JSON-RPC / MCP protocol implementation over stdio."""
