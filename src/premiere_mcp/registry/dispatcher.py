"""
Tool dispatcher — validate, resolve, execute, normalize

dispatch(name, raw_arguments):
  1. look the tool up in the catalog          -> NotFound
  2. validate raw arguments against its schema -> ValidationError
  3. resolve the bound handler (checked at construction)
  4. run the handler                           -> ExecutionError on any exception
  5. wrap the return value                     -> Success

Every call ends in exactly one Success or Failure; nothing the handler
raises escapes dispatch().
"""

import copy
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

from premiere_mcp.registry.catalog import Catalog
from premiere_mcp.registry.errors import ArgumentValidationError, ConfigurationError
from premiere_mcp.registry.results import (
    DispatchResult,
    Success,
    execution_failed,
    invalid,
    not_found,
)
from premiere_mcp.registry.schema import Schema
from premiere_mcp.registry.validation import ArgumentValidator
from premiere_mcp.server.logger import get_logger

log = get_logger("dispatcher")

Handler = Callable[[Dict[str, Any]], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Schema


async def invoke(fn: Callable[..., Any], *args: Any) -> Any:
    """Call a sync or async callable and return its (awaited) result."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class HandlerTable:
    """Explicit operation-name -> handler bindings, built once at startup."""

    def __init__(self, bindings: Optional[Iterable[Tuple[str, Handler]]] = None):
        self._handlers: Dict[str, Handler] = {}
        self._sealed = False
        for name, handler in bindings or ():
            self.bind(name, handler)

    def bind(self, name: str, handler: Handler) -> None:
        if self._sealed:
            raise ConfigurationError(f"Cannot bind handler '{name}': handler table is sealed")
        if name in self._handlers:
            raise ConfigurationError(f"Duplicate handler binding '{name}'")
        if not callable(handler):
            raise ConfigurationError(f"Handler for '{name}' is not callable")
        self._handlers[name] = handler

    def seal(self) -> None:
        self._sealed = True

    def resolve(self, name: str) -> Handler:
        try:
            return self._handlers[name]
        except KeyError:
            raise ConfigurationError(f"No handler bound for tool '{name}'") from None

    def names(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def build_tool_catalog(definitions: Iterable[ToolDefinition]) -> Catalog[ToolDefinition]:
    catalog: Catalog[ToolDefinition] = Catalog("tool", key=lambda d: d.name)
    for definition in definitions:
        catalog.register(definition)
    return catalog


class Dispatcher:
    """Validated, failure-normalizing tool dispatch."""

    def __init__(self, catalog: Catalog[ToolDefinition], handlers: HandlerTable):
        unbound = [name for name in catalog.keys() if name not in handlers]
        orphaned = [name for name in handlers.names() if name not in catalog]
        if unbound or orphaned:
            raise ConfigurationError(
                f"Tool catalog and handler table disagree: "
                f"unbound={unbound} orphaned={orphaned}"
            )

        self._catalog = catalog
        self._handlers = handlers
        self._validators = {
            definition.name: ArgumentValidator(definition.input_schema)
            for definition in catalog
        }
        catalog.seal()
        handlers.seal()
        log.info(f"Dispatcher ready with {len(catalog)} tools")

    def list_operations(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": definition.name,
                "description": definition.description,
                "inputSchema": copy.deepcopy(self._validators[definition.name].wire_schema),
            }
            for definition in self._catalog
        ]

    def find(self, name: str) -> Optional[ToolDefinition]:
        return self._catalog.find(name)

    @property
    def tool_count(self) -> int:
        return len(self._catalog)

    async def dispatch(self, name: str, raw_arguments: Any) -> DispatchResult:
        definition = self._catalog.find(name)
        if definition is None:
            return not_found(f"Tool '{name}' not found")

        try:
            arguments = self._validators[name].validate(raw_arguments)
        except ArgumentValidationError as exc:
            return invalid(f"Invalid arguments for tool '{name}': {exc.message}", exc)

        handler = self._handlers.resolve(name)
        log.info(f"Executing tool: {name}")
        log.debug(f"Tool {name} arguments: {arguments}")

        try:
            payload = await invoke(handler, arguments)
        except Exception as exc:
            log.error(f"Error executing tool {name}: {exc}", exc_info=True)
            return execution_failed(exc)

        return Success(payload)
