"""
Schemas Package for SchemaForge
"""
from .models import (
    FieldType,
    RelationType,
    InputFormat,
    GenerationTarget,
    AUTO_MANAGED_FIELD_NAMES,
    RelationSchema,
    FieldSchema,
    ModelSchema,
    EnumSchema,
    DatabaseSchema,
    validate_schema,
    load_schema_file,
)

__all__ = [
    "FieldType",
    "RelationType",
    "InputFormat",
    "GenerationTarget",
    "AUTO_MANAGED_FIELD_NAMES",
    "RelationSchema",
    "FieldSchema",
    "ModelSchema",
    "EnumSchema",
    "DatabaseSchema",
    "validate_schema",
    "load_schema_file",
]
