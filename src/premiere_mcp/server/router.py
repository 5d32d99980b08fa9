"""
Method Router — Bind MCP methods to the registries

Routes:
  initialize       -> server capabilities handshake
  initialized      -> notification (no response)
  ping             -> pong
  tools/list       -> tool catalog with wire schemas
  tools/call       -> Dispatcher.dispatch
  resources/list   -> resource descriptors
  resources/read   -> ResourceRegistry.read
  prompts/list     -> prompt definitions
  prompts/get      -> PromptRegistry.get

Every registry Failure is logged here and surfaced as a ProtocolError with
code INTERNAL_ERROR; the failure kind travels in the message text and in
error.data.
"""

from typing import Any, Dict, Optional

from premiere_mcp.config import Config
from premiere_mcp.registry.dispatcher import Dispatcher
from premiere_mcp.registry.prompts import PromptRegistry
from premiere_mcp.registry.resources import ResourceRegistry
from premiere_mcp.registry.results import Failure, FailureKind
from premiere_mcp.server.logger import get_logger
from premiere_mcp.server.protocol import (
    initialize_result,
    tools_list_result,
    tool_result_content,
    text_content,
    to_json_text,
    resources_list_result,
    resource_read_result,
    prompts_list_result,
    prompt_get_result,
    ProtocolError,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
)

log = get_logger("router")

NOTIFICATIONS = frozenset({
    "initialized",
    "notifications/initialized",
    "notifications/cancelled",
})


class Router:
    """MCP method dispatcher."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        resources: ResourceRegistry,
        prompts: PromptRegistry,
    ):
        self._dispatcher = dispatcher
        self._resources = resources
        self._prompts = prompts
        self._initialized = False

    async def route(self, msg_type: str, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Route a validated message to the appropriate handler.
        Returns the result payload or None for notifications.
        """
        method = msg.get("method", "")
        params = msg.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise ProtocolError(INVALID_PARAMS, "Params must be an object")

        if method in ("initialized", "notifications/initialized"):
            self._initialized = True
            return None

        if method == "notifications/cancelled":
            # No cancellation primitive: the in-flight call runs to completion.
            log.info(f"Cancellation requested for {params.get('requestId')} (ignored)")
            return None

        if method == "initialize":
            return self._handle_initialize(params)

        if method == "ping":
            return {}

        if method == "tools/list":
            return tools_list_result(self._dispatcher.list_operations())

        if method == "tools/call":
            return await self._handle_tools_call(params)

        if method == "resources/list":
            return resources_list_result(self._resources.list_resources())

        if method == "resources/read":
            return await self._handle_resources_read(params)

        if method == "prompts/list":
            return prompts_list_result(self._prompts.list_prompts())

        if method == "prompts/get":
            return await self._handle_prompts_get(params)

        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    def _handle_initialize(self, params: Dict) -> Dict[str, Any]:
        client_info = params.get("clientInfo") or {}
        log.info(
            f"Client initialize: {client_info.get('name', '?')} "
            f"protocol={params.get('protocolVersion', '?')}"
        )
        return initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=Config.PROTOCOL_VERSION,
        )

    async def _handle_tools_call(self, params: Dict) -> Dict[str, Any]:
        name = params.get("name", "")
        if not name or not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, "Missing tool name")

        result = await self._dispatcher.dispatch(name, params.get("arguments"))
        if isinstance(result, Failure):
            self._fail(f"Failed to execute tool '{name}'", result)

        return tool_result_content([text_content(to_json_text(result.payload))])

    async def _handle_resources_read(self, params: Dict) -> Dict[str, Any]:
        uri = params.get("uri", "")
        if not uri or not isinstance(uri, str):
            raise ProtocolError(INVALID_PARAMS, "Missing resource URI")

        result = await self._resources.read(uri)
        if isinstance(result, Failure):
            self._fail(f"Failed to read resource '{uri}'", result)

        descriptor = self._resources.find(uri)
        return resource_read_result([{
            "uri": uri,
            "mimeType": descriptor.mime_type,
            "text": to_json_text(result.payload),
        }])

    async def _handle_prompts_get(self, params: Dict) -> Dict[str, Any]:
        name = params.get("name", "")
        if not name or not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, "Missing prompt name")

        result = await self._prompts.get(name, params.get("arguments"))
        if isinstance(result, Failure):
            self._fail(f"Failed to generate prompt '{name}'", result)

        wire = result.payload.to_wire()
        return prompt_get_result(wire["description"], wire["messages"])

    @staticmethod
    def _fail(context: str, failure: Failure):
        message = f"{context}: {failure.describe()}"
        if failure.kind is FailureKind.EXECUTION_ERROR:
            log.error(message)
        else:
            log.warning(message)
        raise ProtocolError(INTERNAL_ERROR, message, data={"kind": failure.kind.value})

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def resources(self) -> ResourceRegistry:
        return self._resources

    @property
    def prompts(self) -> PromptRegistry:
        return self._prompts

    @property
    def tool_count(self) -> int:
        return self._dispatcher.tool_count

    @property
    def resource_count(self) -> int:
        return self._resources.resource_count

    @property
    def prompt_count(self) -> int:
        return self._prompts.prompt_count
