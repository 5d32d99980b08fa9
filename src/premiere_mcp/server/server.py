"""
Raw MCP Server — Main Orchestrator

Ties together:
  Transport -> Protocol -> Router -> Registries -> Bridge

Flow:
  1. Transport reads one line from stdin
  2. Protocol validates JSON-RPC 2.0
  3. Router dispatches to the matching registry (in its own task)
  4. Transport writes the response to stdout

Decoding is sequential; handling is not. A slow tool waiting on Premiere
does not hold up the next request, and responses go out in completion
order, correlated by JSON-RPC id.
"""

import asyncio
import signal
from typing import Optional, Set

from premiere_mcp.config import Config
from premiere_mcp.server.logger import get_logger
from premiere_mcp.server.transport import RawStdioTransport
from premiere_mcp.server.protocol import (
    validate_message,
    make_response,
    make_error,
    ProtocolError,
    INTERNAL_ERROR,
)
from premiere_mcp.server.router import Router

log = get_logger("server")


class RawMCPServer:
    """
    Main server orchestrator.

    Usage:
        server = RawMCPServer(Router(dispatcher, resources, prompts), bridge=bridge)
        await server.run()
    """

    def __init__(
        self,
        router: Router,
        bridge=None,
        transport: Optional[RawStdioTransport] = None,
    ):
        Config.ensure_dirs()

        self._router = router
        self._bridge = bridge
        self._transport = transport or RawStdioTransport()
        self._tasks: Set[asyncio.Task] = set()
        self._running = False

    @property
    def router(self) -> Router:
        return self._router

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # -- main loop --

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION}")

        if self._bridge is not None:
            await self._bridge.initialize()
        await self._transport.start()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda: asyncio.create_task(self.shutdown()))
            except (NotImplementedError, RuntimeError):
                pass

        self._running = True
        log.info(
            f"Server ready — tools={self._router.tool_count} "
            f"resources={self._router.resource_count} "
            f"prompts={self._router.prompt_count}"
        )

        try:
            while self._running:
                try:
                    result = await self._transport.read_message()
                except ProtocolError as exc:
                    await self._write_error(None, exc)
                    continue

                if result is None:
                    log.info("EOF on stdin — shutting down")
                    break

                _raw_bytes, parsed = result
                task = asyncio.create_task(self._handle_message(parsed))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

            await self.drain()

        except asyncio.CancelledError:
            log.info("Server cancelled")
        except Exception as exc:
            log.error(f"Server error: {exc}", exc_info=True)
        finally:
            await self.shutdown()

    async def drain(self):
        """Wait for every in-flight request to finish."""
        if self._tasks:
            log.info(f"Waiting for {len(self._tasks)} in-flight requests")
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _handle_message(self, msg):
        """Process a single JSON-RPC message through the full pipeline."""
        request_id = msg.get("id") if isinstance(msg, dict) else None

        try:
            msg_type = validate_message(msg)
            if msg_type in ("response", "error"):
                log.debug(f"Ignoring client {msg_type} for id={request_id}")
                return

            result = await self._router.route(msg_type, msg)

            if result is None or msg_type == "notification":
                return

            await self._transport.write_message(make_response(request_id, result))

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            if request_id is not None or _is_unaddressable(msg):
                await self._write_error(request_id, exc)

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            if request_id is not None:
                await self._write_error(request_id, ProtocolError(INTERNAL_ERROR, str(exc)))

    async def _write_error(self, request_id, exc: ProtocolError):
        await self._transport.write_message(
            make_error(request_id, exc.code, exc.message, exc.data)
        )

    async def shutdown(self):
        """Graceful shutdown — close transport, release the bridge."""
        if not self._running:
            return
        self._running = False

        log.info("Shutting down")
        await self._transport.close()
        if self._bridge is not None:
            try:
                await self._bridge.cleanup()
            except Exception as exc:
                log.warning(f"Bridge cleanup failed: {exc}")

        log.info("Server stopped")


def _is_unaddressable(msg) -> bool:
    """True for payloads too malformed to carry an id (answered with id=null)."""
    return not isinstance(msg, dict) or ("method" not in msg and "id" not in msg)
