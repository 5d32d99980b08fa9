"""
Resource registry — read-only content addressed by URI
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

from premiere_mcp.registry.catalog import Catalog
from premiere_mcp.registry.dispatcher import invoke
from premiere_mcp.registry.results import DispatchResult, Success, execution_failed, not_found
from premiere_mcp.server.logger import get_logger

log = get_logger("resources")

Reader = Callable[[], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    description: str = ""
    mime_type: str = "application/json"

    def to_wire(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


class ResourceRegistry:
    """URI -> reader lookup; sealed after construction."""

    def __init__(self, entries: Iterable[Tuple[ResourceDescriptor, Reader]]):
        self._catalog: Catalog[ResourceDescriptor] = Catalog("resource", key=lambda d: d.uri)
        self._readers: Dict[str, Reader] = {}
        for descriptor, reader in entries:
            self._catalog.register(descriptor)
            self._readers[descriptor.uri] = reader
        self._catalog.seal()

    def list_resources(self) -> List[Dict[str, Any]]:
        return [descriptor.to_wire() for descriptor in self._catalog]

    def find(self, uri: str) -> Optional[ResourceDescriptor]:
        return self._catalog.find(uri)

    @property
    def resource_count(self) -> int:
        return len(self._catalog)

    async def read(self, uri: str) -> DispatchResult:
        descriptor = self._catalog.find(uri)
        if descriptor is None:
            return not_found(f"Resource '{uri}' not found")

        log.info(f"Reading resource: {uri}")
        try:
            content = await invoke(self._readers[uri])
        except Exception as exc:
            log.error(f"Error reading resource {uri}: {exc}", exc_info=True)
            return execution_failed(exc)

        return Success(content)
