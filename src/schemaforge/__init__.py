"""
SchemaForge
Turns Prisma schemas, SQL DDL and plain-English data model descriptions into
type-safe TypeScript: Zod validation schemas, type definitions, API routers
and form bindings.

Usage:
    from schemaforge import SchemaPipeline

    pipeline = SchemaPipeline()
    parsed = pipeline.parse(open("schema.prisma").read())
    print(pipeline.generate(parsed.schema, "zod").code)
"""

__version__ = "1.0.0"

from .config import (
    GenerationConfig,
    LLMConfig,
    SystemConfig,
    get_config,
    load_generation_config,
)
from .schemas import (
    FieldType,
    RelationType,
    InputFormat,
    GenerationTarget,
    FieldSchema,
    ModelSchema,
    EnumSchema,
    RelationSchema,
    DatabaseSchema,
    validate_schema,
    load_schema_file,
)
from .parsers import detect_format, parse_schema
from .generators import generate_from_template, is_template_target
from .orchestration import SchemaPipeline, ParseResult, GenerationResult
from .utils import (
    SchemaForgeError,
    UnknownFormatError,
    UnsupportedTargetError,
    SchemaValidationError,
    LLMError,
    ConfigurationError,
    setup_logging,
)

__all__ = [
    "__version__",
    # Config
    "GenerationConfig",
    "LLMConfig",
    "SystemConfig",
    "get_config",
    "load_generation_config",
    # IR
    "FieldType",
    "RelationType",
    "InputFormat",
    "GenerationTarget",
    "FieldSchema",
    "ModelSchema",
    "EnumSchema",
    "RelationSchema",
    "DatabaseSchema",
    "validate_schema",
    "load_schema_file",
    # Core
    "detect_format",
    "parse_schema",
    "generate_from_template",
    "is_template_target",
    # Orchestration
    "SchemaPipeline",
    "ParseResult",
    "GenerationResult",
    # Errors
    "SchemaForgeError",
    "UnknownFormatError",
    "UnsupportedTargetError",
    "SchemaValidationError",
    "LLMError",
    "ConfigurationError",
    "setup_logging",
]
