"""
SQL DDL Parser
Converts CREATE TYPE ... AS ENUM and CREATE TABLE statements into the
intermediate representation. Handles PostgreSQL and MySQL-style DDL.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional

import sqlparse
from sqlparse.exceptions import SQLParseError

from .base import BaseSchemaParser
from ..schemas import (
    DatabaseSchema,
    EnumSchema,
    FieldSchema,
    FieldType,
    InputFormat,
    ModelSchema,
    RelationSchema,
    RelationType,
)
from ..utils import get_logger
from ..utils.naming import to_camel_case, to_pascal_case

logger = get_logger(__name__)

_CREATE_ENUM = re.compile(
    r"CREATE\s+TYPE\s+(\w+)\s+AS\s+ENUM\s*\(([^)]+)\)",
    re.IGNORECASE,
)
_CREATE_TABLE = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?[\"`]?(\w+)[\"`]?\s*\(([^;]+)\)",
    re.IGNORECASE,
)
_TABLE_CONSTRAINT = re.compile(
    r"^(PRIMARY\s+KEY|FOREIGN\s+KEY|UNIQUE|INDEX|CHECK|CONSTRAINT)",
    re.IGNORECASE,
)
# column_name TYPE(size) [NOT NULL] [DEFAULT ...] [PRIMARY KEY] [UNIQUE] [REFERENCES ...]
_COLUMN = re.compile(r"^[\"`]?(\w+)[\"`]?\s+(\w+)(?:\(([^)]*)\))?(.*)$", re.IGNORECASE)
_DEFAULT = re.compile(r"DEFAULT\s+(?:'([^']*)'|(\S+))", re.IGNORECASE)
_REFERENCES = re.compile(r"REFERENCES\s+[\"`]?(\w+)[\"`]?", re.IGNORECASE)
_LINE_BREAKS = re.compile(r"\s*\n\s*")


def split_columns(body: str) -> List[str]:
    """Split a table body on top-level commas only"""
    result = []
    current = ""
    depth = 0

    for char in body:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1

        if char == "," and depth == 0:
            result.append(current)
            current = ""
        else:
            current += char

    if current.strip():
        result.append(current)

    return result


class SqlDdlParser(BaseSchemaParser):
    """
    Regex-driven DDL parser

    Enums are collected from the whole document before any table is
    parsed, so column types can reference them regardless of statement
    order. A REFERENCES clause always turns the column into a one-to-one
    relation, overriding its scalar or enum type.
    """

    input_format = InputFormat.SQL

    TYPE_MAP: Dict[str, FieldType] = {
        # String types
        "VARCHAR": FieldType.STRING,
        "CHAR": FieldType.STRING,
        "TEXT": FieldType.STRING,
        "UUID": FieldType.STRING,
        "CITEXT": FieldType.STRING,
        # Number types
        "INTEGER": FieldType.NUMBER,
        "INT": FieldType.NUMBER,
        "SMALLINT": FieldType.NUMBER,
        "BIGINT": FieldType.NUMBER,
        "SERIAL": FieldType.NUMBER,
        "BIGSERIAL": FieldType.NUMBER,
        "FLOAT": FieldType.NUMBER,
        "DOUBLE": FieldType.NUMBER,
        "DECIMAL": FieldType.NUMBER,
        "NUMERIC": FieldType.NUMBER,
        "REAL": FieldType.NUMBER,
        # Boolean
        "BOOLEAN": FieldType.BOOLEAN,
        "BOOL": FieldType.BOOLEAN,
        # Date/time
        "DATE": FieldType.DATE,
        "TIMESTAMP": FieldType.DATETIME,
        "TIMESTAMPTZ": FieldType.DATETIME,
        # JSON
        "JSON": FieldType.JSON,
        "JSONB": FieldType.JSON,
    }

    def parse(self, text: str) -> DatabaseSchema:
        ddl = self._strip_comments(text)

        enums = [
            EnumSchema(
                name=match.group(1),
                values=[value.strip().replace("'", "") for value in match.group(2).split(",")],
            )
            for match in _CREATE_ENUM.finditer(ddl)
        ]

        models = [
            ModelSchema(
                name=to_pascal_case(match.group(1)),
                fields=self._parse_columns(match.group(1), match.group(2), enums),
            )
            for match in _CREATE_TABLE.finditer(ddl)
        ]

        return DatabaseSchema(models=models, enums=enums)

    @staticmethod
    def _strip_comments(text: str) -> str:
        try:
            return sqlparse.format(text, strip_comments=True)
        except SQLParseError as e:
            logger.debug(f"Comment stripping failed, parsing raw text: {e}")
            return text

    def _parse_columns(
        self,
        table_name: str,
        body: str,
        known_enums: List[EnumSchema]
    ) -> List[FieldSchema]:
        fields = []

        for definition in split_columns(body):
            trimmed = _LINE_BREAKS.sub(" ", definition.strip())

            if _TABLE_CONSTRAINT.match(trimmed):
                continue

            field = self._parse_column(trimmed, known_enums)
            if field is None:
                logger.debug(
                    "Skipping unrecognized column definition",
                    extra={"extra_fields": {"table": table_name, "definition": trimmed}}
                )
                continue
            fields.append(field)

        return fields

    def _parse_column(self, definition: str, known_enums: List[EnumSchema]) -> Optional[FieldSchema]:
        match = _COLUMN.match(definition)
        if not match:
            return None

        name, raw_type, rest = match.group(1), match.group(2), match.group(4)
        rest_upper = rest.upper()

        is_id = "PRIMARY KEY" in rest_upper or "SERIAL" in rest_upper
        is_unique = "UNIQUE" in rest_upper
        is_required = "NOT NULL" in rest_upper or is_id

        default_value = None
        default_match = _DEFAULT.search(rest)
        if default_match:
            quoted, bare = default_match.group(1), default_match.group(2)
            default_value = quoted if quoted is not None else bare

        enum_def = next(
            (e for e in known_enums if e.name.lower() == raw_type.lower()),
            None,
        )
        field_type = FieldType.ENUM if enum_def else self.TYPE_MAP.get(raw_type.upper(), FieldType.STRING)

        relation = None
        ref_match = _REFERENCES.search(rest)
        if ref_match:
            field_type = FieldType.RELATION
            relation = RelationSchema(
                model=to_pascal_case(ref_match.group(1)),
                type=RelationType.ONE_TO_ONE,
                foreign_key=to_camel_case(name),
            )

        return FieldSchema(
            name=to_camel_case(name),
            type=field_type,
            is_required=is_required,
            is_unique=is_unique,
            is_id=is_id,
            is_list=False,
            default=default_value or None,
            enum_values=list(enum_def.values) if enum_def else None,
            relation=relation,
        )
