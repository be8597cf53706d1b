"""
Intermediate Representation for SchemaForge
Every input format (Prisma, SQL, English) normalizes to these models and
every generator consumes them.
"""
from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..utils.errors import SchemaValidationError


class FieldType(str, Enum):
    """Closed set of field types understood by every generator"""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    ENUM = "enum"
    JSON = "json"
    RELATION = "relation"


class RelationType(str, Enum):
    """Relation cardinality"""
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


class InputFormat(str, Enum):
    """Raw schema input dialects"""
    PRISMA = "prisma"
    SQL = "sql"
    ENGLISH = "english"


class GenerationTarget(str, Enum):
    """Code artifacts that can be rendered from the IR"""
    ZOD = "zod"
    TRPC = "trpc"
    REACT_FORM = "react-form"
    TYPES = "types"


# Fields excluded from create/update input shapes besides the id field
AUTO_MANAGED_FIELD_NAMES = frozenset({"createdAt", "updatedAt", "created_at", "updated_at"})

_IR_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class RelationSchema(BaseModel):
    """Target and cardinality of a relation field"""
    model_config = _IR_MODEL_CONFIG

    model: str
    type: RelationType
    foreign_key: Optional[str] = None


class FieldSchema(BaseModel):
    """A single attribute of a model"""
    model_config = _IR_MODEL_CONFIG

    name: str
    type: FieldType
    is_required: StrictBool
    is_unique: StrictBool
    is_id: StrictBool
    is_list: StrictBool = False
    default: Optional[str] = None
    enum_values: Optional[List[str]] = None
    relation: Optional[RelationSchema] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _check_relation_present(self) -> "FieldSchema":
        if self.type == FieldType.RELATION and self.relation is None:
            raise ValueError(f"relation field '{self.name}' is missing its 'relation' target")
        return self

    @property
    def is_relation(self) -> bool:
        return self.type == FieldType.RELATION

    @property
    def is_auto_managed(self) -> bool:
        """Id and created/updated timestamps are never part of input shapes"""
        return self.is_id or self.name in AUTO_MANAGED_FIELD_NAMES


class ModelSchema(BaseModel):
    """One entity/table definition"""
    model_config = _IR_MODEL_CONFIG

    name: str
    fields: List[FieldSchema]
    description: Optional[str] = None

    @property
    def data_fields(self) -> List[FieldSchema]:
        """Non-relation fields, in source order"""
        return [f for f in self.fields if not f.is_relation]

    @property
    def create_fields(self) -> List[FieldSchema]:
        """Fields accepted when creating a record"""
        return [f for f in self.data_fields if not f.is_auto_managed]

    @property
    def relation_fields(self) -> List[FieldSchema]:
        return [f for f in self.fields if f.is_relation and f.relation is not None]


class EnumSchema(BaseModel):
    """Top-level enumeration; value order is significant"""
    model_config = _IR_MODEL_CONFIG

    name: str
    values: List[str]


class DatabaseSchema(BaseModel):
    """The normalized schema that crosses the parser/generator boundary"""
    model_config = _IR_MODEL_CONFIG

    models: List[ModelSchema]
    enums: List[EnumSchema] = Field(default_factory=list)

    def get_model(self, name: str) -> Optional[ModelSchema]:
        """Get model by name (case-insensitive)"""
        name_lower = name.lower()
        for model in self.models:
            if model.name.lower() == name_lower:
                return model
        return None

    def find_enum_by_values(self, values: Optional[List[str]]) -> Optional[EnumSchema]:
        """First top-level enum whose values match exactly, order included"""
        if values is None:
            return None
        for enum_def in self.enums:
            if list(enum_def.values) == list(values):
                return enum_def
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _format_validation_errors(error: PydanticValidationError) -> List[str]:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        problems.append(f"{location}: {detail['msg']}")
    return problems


def validate_schema(data: Union[str, bytes, Dict[str, Any]]) -> DatabaseSchema:
    """
    Validate untrusted IR data (e.g. LLM output) into a DatabaseSchema

    Args:
        data: JSON text or an already-decoded mapping

    Returns:
        Validated DatabaseSchema

    Raises:
        SchemaValidationError: If the data is not valid JSON or violates the IR structure
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaValidationError(
                "Schema is not valid UTF-8 text",
                validation_errors=[f"byte {e.start}: {e.reason}"],
                original_error=e,
            )

    if isinstance(data, str):
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise SchemaValidationError(
                "Schema is not valid JSON",
                validation_errors=[f"line {e.lineno} column {e.colno}: {e.msg}"],
                original_error=e,
            )
    else:
        payload = data

    if not isinstance(payload, dict):
        raise SchemaValidationError(
            "Schema must be an object with a 'models' array",
            validation_errors=[f"<root>: got {type(payload).__name__}"],
        )

    try:
        return DatabaseSchema.model_validate(payload)
    except PydanticValidationError as e:
        raise SchemaValidationError(
            f"Schema failed validation with {e.error_count()} error(s)",
            validation_errors=_format_validation_errors(e),
            original_error=e,
        )


def load_schema_file(path: Union[str, Path]) -> DatabaseSchema:
    """Load and validate an IR document from a JSON or YAML file"""
    path = Path(path)
    content = path.read_text(encoding="utf-8")

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SchemaValidationError(
                f"Schema file is not valid YAML: {path}",
                original_error=e,
            )
        return validate_schema(data)

    return validate_schema(content)
