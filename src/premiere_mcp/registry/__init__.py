"""
Registry and dispatch engine

  catalog     — ordered, write-once definition store
  schema      — declarative argument schemas + JSON Schema translation
  validation  — jsonschema-backed argument validation
  results     — Success / Failure dispatch results
  dispatcher  — tool handler table and dispatcher
  resources   — URI-addressed resource registry
  prompts     — prompt registry
"""

from premiere_mcp.registry.catalog import Catalog
from premiere_mcp.registry.dispatcher import Dispatcher, HandlerTable, ToolDefinition, build_tool_catalog
from premiere_mcp.registry.errors import (
    ArgumentValidationError,
    ConfigurationError,
    SchemaTranslationError,
)
from premiere_mcp.registry.prompts import (
    PromptArgument,
    PromptDefinition,
    PromptMessage,
    PromptRegistry,
    RenderedPrompt,
)
from premiere_mcp.registry.resources import ResourceDescriptor, ResourceRegistry
from premiere_mcp.registry.results import DispatchResult, Failure, FailureKind, Success

__all__ = [
    "Catalog",
    "Dispatcher",
    "HandlerTable",
    "ToolDefinition",
    "build_tool_catalog",
    "ArgumentValidationError",
    "ConfigurationError",
    "SchemaTranslationError",
    "PromptArgument",
    "PromptDefinition",
    "PromptMessage",
    "PromptRegistry",
    "RenderedPrompt",
    "ResourceDescriptor",
    "ResourceRegistry",
    "DispatchResult",
    "Failure",
    "FailureKind",
    "Success",
]
