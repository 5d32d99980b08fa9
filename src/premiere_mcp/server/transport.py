"""
Raw STDIO Transport — newline-delimited JSON-RPC over stdin/stdout

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
"""

import sys
import json
import asyncio
from typing import Any, BinaryIO, Dict, Optional, Tuple

from premiere_mcp.server.logger import get_logger
from premiere_mcp.server.protocol import ProtocolError, PARSE_ERROR

log = get_logger("transport")

# Premiere payloads (track/clip listings) can exceed asyncio's 64 KiB default
READ_LIMIT = 2**24


class RawStdioTransport:
    """Raw STDIO transport."""

    def __init__(
        self,
        reader: Optional[asyncio.StreamReader] = None,
        writer: Optional[BinaryIO] = None,
    ):
        self.running = False
        self._reader = reader
        self._stdout = writer

    async def start(self):
        """Initialize async stdin reader and direct stdout writer."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=READ_LIMIT)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        if self._stdout is None:
            self._stdout = sys.stdout.buffer
        self.running = True
        log.info("Transport initialized")

    async def read_message(self) -> Optional[Tuple[bytes, Any]]:
        """
        Read one JSON-RPC message from stdin.
        Returns (raw_bytes, parsed) or None on EOF.
        Raises ProtocolError(PARSE_ERROR) for a line that is not JSON.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        while True:
            raw_bytes = await self._reader.readline()
            if not raw_bytes:
                return None
            if raw_bytes.strip():
                break

        try:
            parsed = json.loads(raw_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.error(f"JSON parse error: {exc}")
            raise ProtocolError(PARSE_ERROR, f"Parse error: {exc}") from exc

        return raw_bytes, parsed

    async def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout."""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_text = json.dumps(message, separators=(",", ":")) + "\n"
        self._stdout.write(raw_text.encode("utf-8"))
        self._stdout.flush()

    async def close(self):
        self.running = False
        log.info("Transport closed")
