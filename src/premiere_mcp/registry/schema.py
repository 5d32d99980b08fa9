"""
Declarative argument schemas and their JSON Schema translation

A Schema is the single description of an operation's input shape. Two
consumers read it: to_json_schema() renders the wire-format schema for the
tools/list capability listing, and the validator (validation.py) enforces
that same rendered schema on every call, so what is advertised and what is
enforced cannot diverge.

    obj({
        "name": string("Project name"),
        "location": string("Directory to save into"),
        "overwrite": boolean(required=False, default=False),
    })
"""

import json
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from premiere_mcp.registry.errors import SchemaTranslationError

JSON_SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"

_PRIMITIVES = {
    "string": "string",
    "number": "number",
    "integer": "integer",
    "boolean": "boolean",
}


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Schema:
    kind: str
    description: str = ""
    required: bool = True
    enum: Tuple[Any, ...] = ()
    default: Any = MISSING
    items: Optional["Schema"] = None
    properties: Tuple[Tuple[str, "Schema"], ...] = ()

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return tuple(name for name, prop in self.properties if prop.required)

    def field(self, name: str) -> Optional["Schema"]:
        for prop_name, prop in self.properties:
            if prop_name == name:
                return prop
        return None

    def optional(self) -> "Schema":
        return replace(self, required=False)


# --- constructors ---

def _scalar(kind: str, description: str, required: bool,
            enum: Optional[Iterable[Any]], default: Any) -> Schema:
    return Schema(
        kind=kind,
        description=description,
        required=required and default is MISSING,
        enum=tuple(enum or ()),
        default=default,
    )


def string(description: str = "", *, required: bool = True,
           enum: Optional[Iterable[str]] = None, default: Any = MISSING) -> Schema:
    return _scalar("string", description, required, enum, default)


def number(description: str = "", *, required: bool = True,
           default: Any = MISSING) -> Schema:
    return _scalar("number", description, required, None, default)


def integer(description: str = "", *, required: bool = True,
            default: Any = MISSING) -> Schema:
    return _scalar("integer", description, required, None, default)


def boolean(description: str = "", *, required: bool = True,
            default: Any = MISSING) -> Schema:
    return _scalar("boolean", description, required, None, default)


def any_value(description: str = "", *, required: bool = True) -> Schema:
    return Schema(kind="any", description=description, required=required)


def record(description: str = "", *, required: bool = True) -> Schema:
    """Free-form string-keyed mapping (e.g. effect parameters)."""
    return Schema(kind="record", description=description, required=required)


def array(items: Schema, description: str = "", *, required: bool = True) -> Schema:
    return Schema(kind="array", description=description, required=required, items=items)


def obj(properties: Optional[Dict[str, Schema]] = None, description: str = "", *,
        required: bool = True) -> Schema:
    return Schema(
        kind="object",
        description=description,
        required=required,
        properties=tuple((properties or {}).items()),
    )


# --- translation ---

def _check_json_value(value: Any, where: str) -> None:
    try:
        json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise SchemaTranslationError(f"{where}: value {value!r} is not JSON-serializable") from exc


def _translate(schema: Schema, where: str) -> Dict[str, Any]:
    if not isinstance(schema, Schema):
        raise SchemaTranslationError(f"{where}: expected a Schema, got {type(schema).__name__}")

    out: Dict[str, Any]
    if schema.kind in _PRIMITIVES:
        out = {"type": _PRIMITIVES[schema.kind]}
    elif schema.kind == "any":
        out = {}
    elif schema.kind == "record":
        out = {"type": "object", "additionalProperties": {}}
    elif schema.kind == "array":
        if schema.items is None:
            raise SchemaTranslationError(f"{where}: array schema has no item schema")
        out = {"type": "array", "items": _translate(schema.items, f"{where}[]")}
    elif schema.kind == "object":
        properties: Dict[str, Any] = {}
        for name, prop in schema.properties:
            if not isinstance(name, str) or not name:
                raise SchemaTranslationError(f"{where}: invalid property name {name!r}")
            properties[name] = _translate(prop, f"{where}.{name}" if where else name)
        out = {"type": "object", "properties": properties}
        required = list(schema.required_fields)
        if required:
            out["required"] = required
    else:
        raise SchemaTranslationError(f"{where or '<root>'}: unsupported schema kind '{schema.kind}'")

    if schema.enum:
        if schema.kind not in _PRIMITIVES:
            raise SchemaTranslationError(f"{where}: enum is only supported on primitive kinds")
        _check_json_value(list(schema.enum), where)
        out["enum"] = list(schema.enum)
    if schema.has_default:
        _check_json_value(schema.default, where)
        out["default"] = schema.default
    if schema.description:
        out["description"] = schema.description
    return out


def to_json_schema(schema: Schema) -> Dict[str, Any]:
    """
    Translate a Schema into a draft-07 JSON Schema object.

    Raises SchemaTranslationError for anything without a wire representation;
    callers run this at registration time so the failure aborts startup.
    """
    wire = _translate(schema, "")
    wire["$schema"] = JSON_SCHEMA_DIALECT
    return wire


def prompt_arguments_schema(arguments: Iterable[Tuple[str, str, bool]]) -> Schema:
    """Build the object schema for a prompt's (name, description, required) arguments."""
    props: List[Tuple[str, Schema]] = [
        (name, string(description, required=required))
        for name, description, required in arguments
    ]
    return obj(dict(props))
