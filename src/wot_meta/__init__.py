"""Component metadata extraction for the Wot UI documentation."""

from .errors import ConversionError, DocMetaError, FetchError
from .models import ComponentMeta, DataStructure, DataStructureField, Field, FieldType
from .registry import ComponentRegistry
from .schema import (
    build_component_meta,
    load_component_schema,
    load_component_schema_async,
    load_component_schemas_async,
)

__version__ = '0.1.0'

__all__ = [
    'ComponentMeta',
    'ComponentRegistry',
    'ConversionError',
    'DataStructure',
    'DataStructureField',
    'DocMetaError',
    'FetchError',
    'Field',
    'FieldType',
    'build_component_meta',
    'load_component_schema',
    'load_component_schema_async',
    'load_component_schemas_async',
]
