"""
Registry error taxonomy

Startup defects (ConfigurationError and subclasses) are never caught: they
mean the catalog and the handler bindings have drifted apart and the server
must not start. Per-request problems never raise out of a registry; they are
returned as Failure values (see results.py).
"""


class ConfigurationError(Exception):
    """Catalog / handler-table mismatch, duplicate key, or late registration."""


class SchemaTranslationError(ConfigurationError):
    """A schema description has no wire-format representation."""


class ArgumentValidationError(Exception):
    """Raw arguments do not conform to a schema. Carries the first violation."""

    def __init__(self, message: str, field: str = ""):
        self.message = message
        self.field = field
        super().__init__(message)
