"""OI-FITS extension layouts.

- definitions: Field/extension layout models and the definition-table parser
- registry: Layout registry keyed by (extension name, revision)
- formats: Built-in layouts of the OI-FITS standard
"""

from oifits.registry.definitions import (
    DataType,
    ExtensionSchema,
    FieldDefinition,
    field_key,
    parse_definition,
)
from oifits.registry.registry import SchemaRegistry, create_registry, get_registry
from oifits.registry.formats import BUILTIN_FORMATS, install_formats

__all__ = [
    "DataType",
    "ExtensionSchema",
    "FieldDefinition",
    "field_key",
    "parse_definition",
    "SchemaRegistry",
    "create_registry",
    "get_registry",
    "BUILTIN_FORMATS",
    "install_formats",
]
