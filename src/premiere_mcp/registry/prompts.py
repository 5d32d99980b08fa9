"""
Prompt registry — named templates rendered into role-tagged message sequences
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

from premiere_mcp.registry.catalog import Catalog
from premiere_mcp.registry.dispatcher import invoke
from premiere_mcp.registry.errors import ArgumentValidationError, ConfigurationError
from premiere_mcp.registry.results import (
    DispatchResult,
    Success,
    execution_failed,
    invalid,
    not_found,
)
from premiere_mcp.registry.schema import prompt_arguments_schema
from premiere_mcp.registry.validation import ArgumentValidator
from premiere_mcp.server.logger import get_logger

log = get_logger("prompts")

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = False

    def to_wire(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": self.required}


@dataclass(frozen=True)
class PromptDefinition:
    name: str
    description: str
    arguments: Tuple[PromptArgument, ...] = ()

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [arg.to_wire() for arg in self.arguments],
        }


@dataclass(frozen=True)
class PromptMessage:
    role: str
    text: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown prompt role: {self.role}")

    def to_wire(self) -> Dict[str, Any]:
        return {"role": self.role, "content": {"type": "text", "text": self.text}}


@dataclass(frozen=True)
class RenderedPrompt:
    description: str
    messages: Tuple[PromptMessage, ...] = field(default_factory=tuple)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "messages": [message.to_wire() for message in self.messages],
        }


Renderer = Callable[[Dict[str, str]], Union[RenderedPrompt, Awaitable[RenderedPrompt]]]


class PromptRegistry:
    """Name -> renderer lookup with per-prompt argument validation."""

    def __init__(self, entries: Iterable[Tuple[PromptDefinition, Renderer]]):
        self._catalog: Catalog[PromptDefinition] = Catalog("prompt", key=lambda d: d.name)
        self._renderers: Dict[str, Renderer] = {}
        self._validators: Dict[str, ArgumentValidator] = {}
        for definition, renderer in entries:
            if not callable(renderer):
                raise ConfigurationError(f"Renderer for prompt '{definition.name}' is not callable")
            self._catalog.register(definition)
            self._renderers[definition.name] = renderer
            self._validators[definition.name] = ArgumentValidator(prompt_arguments_schema(
                (arg.name, arg.description, arg.required) for arg in definition.arguments
            ))
        self._catalog.seal()

    def list_prompts(self) -> List[Dict[str, Any]]:
        return [definition.to_wire() for definition in self._catalog]

    def find(self, name: str) -> Optional[PromptDefinition]:
        return self._catalog.find(name)

    @property
    def prompt_count(self) -> int:
        return len(self._catalog)

    async def get(self, name: str, raw_arguments: Any = None) -> DispatchResult:
        definition = self._catalog.find(name)
        if definition is None:
            return not_found(f"Prompt '{name}' not found")

        try:
            arguments = self._validators[name].validate(raw_arguments)
        except ArgumentValidationError as exc:
            return invalid(f"Invalid arguments for prompt '{name}': {exc.message}", exc)

        log.info(f"Generating prompt: {name}")
        try:
            rendered = await invoke(self._renderers[name], arguments)
        except Exception as exc:
            log.error(f"Error generating prompt {name}: {exc}", exc_info=True)
            return execution_failed(exc)

        if not isinstance(rendered, RenderedPrompt):
            return execution_failed(TypeError(
                f"Prompt '{name}' renderer returned {type(rendered).__name__}, expected RenderedPrompt"
            ))
        return Success(rendered)
