"""
Schema catalog — ordered, write-once registry of definitions

One Catalog instance each holds the tool, resource and prompt definitions.
Entries are registered during startup, then the catalog is sealed and only
read afterwards, so no locking is needed under concurrent dispatch.
"""

from typing import Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar

from premiere_mcp.registry.errors import ConfigurationError

T = TypeVar("T")


class Catalog(Generic[T]):
    """Registration-ordered mapping of unique keys to immutable definitions."""

    def __init__(self, kind: str, key: Callable[[T], str]):
        self._kind = kind
        self._key = key
        self._entries: Dict[str, T] = {}
        self._sealed = False

    def register(self, entry: T) -> T:
        key = self._key(entry)
        if self._sealed:
            raise ConfigurationError(
                f"Cannot register {self._kind} '{key}': catalog is sealed"
            )
        if key in self._entries:
            raise ConfigurationError(f"Duplicate {self._kind} '{key}'")
        self._entries[key] = entry
        return entry

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def find(self, key: str) -> Optional[T]:
        """Return the entry for key, or None when it is not registered."""
        return self._entries.get(key)

    def list(self) -> Tuple[T, ...]:
        return tuple(self._entries.values())

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())
