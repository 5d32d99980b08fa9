"""
Argument validation against a Schema

Validation runs jsonschema over the exact wire schema produced by
to_json_schema(), then builds the clean argument record handed to the
handler: declared fields only, defaults filled in.
"""

import copy
from typing import Any, Dict, Mapping

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError

from premiere_mcp.registry.errors import ArgumentValidationError, SchemaTranslationError
from premiere_mcp.registry.schema import Schema, to_json_schema


def _missing_property(error: ValidationError) -> str:
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    for name in error.validator_value:
        if name not in instance:
            return name
    return ""


def _describe(error: ValidationError) -> ArgumentValidationError:
    path = [str(p) for p in error.absolute_path]
    if error.validator == "required":
        missing = _missing_property(error)
        field = ".".join(path + [missing]) if missing else ".".join(path)
        return ArgumentValidationError(f"missing required field '{field}'", field=field)
    field = ".".join(path)
    if field:
        return ArgumentValidationError(f"field '{field}': {error.message}", field=field)
    return ArgumentValidationError(error.message)


def _clean(schema: Schema, value: Any) -> Any:
    if schema.kind == "object" and isinstance(value, Mapping):
        result: Dict[str, Any] = {}
        for name, prop in schema.properties:
            if name in value:
                result[name] = _clean(prop, value[name])
            elif prop.has_default:
                result[name] = copy.deepcopy(prop.default)
        return result
    if schema.kind == "array" and isinstance(value, list) and schema.items is not None:
        return [_clean(schema.items, item) for item in value]
    return value


class ArgumentValidator:
    """Compiled validator for one Schema."""

    def __init__(self, schema: Schema):
        if schema.kind != "object":
            raise SchemaTranslationError(
                f"argument schemas must be objects, got '{schema.kind}'"
            )
        self.schema = schema
        self.wire_schema = to_json_schema(schema)
        try:
            Draft7Validator.check_schema(self.wire_schema)
        except SchemaError as exc:
            raise SchemaTranslationError(f"invalid wire schema: {exc.message}") from exc
        self._validator = Draft7Validator(self.wire_schema)

    def validate(self, raw: Any) -> Dict[str, Any]:
        """
        Return the clean argument record, or raise ArgumentValidationError
        describing the first (shallowest) violation.
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ArgumentValidationError(
                f"arguments must be an object, got {type(raw).__name__}"
            )
        raw = dict(raw)

        errors = list(self._validator.iter_errors(raw))
        if errors:
            first = min(errors, key=lambda e: len(e.absolute_path))
            raise _describe(first)

        return _clean(self.schema, raw)
