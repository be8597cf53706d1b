"""
Prisma Schema Parser
Converts Prisma schema blocks into the intermediate representation.
Fully deterministic, no LLM calls.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional

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

logger = get_logger(__name__)

_MODEL_START = re.compile(r"^model\s+(\w+)\s*\{")
_ENUM_START = re.compile(r"^enum\s+(\w+)\s*\{")

# fieldName Type[]? @attributes
_FIELD_LINE = re.compile(r"^(\w+)\s+(\w+)(\[\])?\??")
_RELATION_ATTR = re.compile(r"@relation\(([^)]*)\)")
_RELATION_FIELDS = re.compile(r"fields:\s*\[(\w+)\]")

_DEFAULT_ATTR = "@default("


class PrismaSchemaParser(BaseSchemaParser):
    """
    Line-oriented Prisma parser

    Supported subset:
        model User {
          id        String   @id @default(cuid())
          email     String   @unique
          name      String?
          posts     Post[]
          role      Role     @default(AUTHOR)
          author    User     @relation(fields: [authorId], references: [id])
        }

        enum Role {
          ADMIN
          AUTHOR
        }

    Enum types resolve only against enums whose block closed earlier in
    the document; a model referencing an enum declared further down sees
    that type as a relation.
    """

    input_format = InputFormat.PRISMA

    TYPE_MAP: Dict[str, FieldType] = {
        "String": FieldType.STRING,
        "Int": FieldType.NUMBER,
        "Float": FieldType.NUMBER,
        "Decimal": FieldType.NUMBER,
        "BigInt": FieldType.NUMBER,
        "Boolean": FieldType.BOOLEAN,
        "DateTime": FieldType.DATETIME,
        "Json": FieldType.JSON,
    }

    def parse(self, text: str) -> DatabaseSchema:
        models: List[ModelSchema] = []
        enums: List[EnumSchema] = []

        block_kind: Optional[str] = None
        block_name = ""
        block_lines: List[str] = []

        for line in text.split("\n"):
            trimmed = line.strip()

            model_match = _MODEL_START.match(trimmed)
            if model_match:
                block_kind, block_name, block_lines = "model", model_match.group(1), []
                continue

            enum_match = _ENUM_START.match(trimmed)
            if enum_match:
                block_kind, block_name, block_lines = "enum", enum_match.group(1), []
                continue

            if trimmed == "}" and block_kind is not None:
                if block_kind == "model":
                    models.append(ModelSchema(
                        name=block_name,
                        fields=self._parse_model_fields(block_name, block_lines, enums),
                    ))
                else:
                    enums.append(EnumSchema(name=block_name, values=list(block_lines)))
                block_kind = None
                continue

            if block_kind is not None and trimmed and not trimmed.startswith(("//", "@@")):
                block_lines.append(trimmed)

        if block_kind is not None:
            logger.debug(
                f"Unterminated {block_kind} block ignored",
                extra={"extra_fields": {"block": block_name, "lines": len(block_lines)}}
            )

        return DatabaseSchema(models=models, enums=enums)

    def _parse_model_fields(
        self,
        model_name: str,
        lines: List[str],
        known_enums: List[EnumSchema]
    ) -> List[FieldSchema]:
        fields = []
        for line in lines:
            field = self._parse_field(line, known_enums)
            if field is None:
                logger.debug(
                    "Skipping unrecognized field line",
                    extra={"extra_fields": {"model": model_name, "line": line}}
                )
                continue
            fields.append(field)
        return fields

    def _parse_field(self, line: str, known_enums: List[EnumSchema]) -> Optional[FieldSchema]:
        match = _FIELD_LINE.match(line)
        if not match:
            return None

        name, raw_type, list_marker = match.group(1), match.group(2), match.group(3)
        is_list = list_marker is not None

        enum_def = next((e for e in known_enums if e.name == raw_type), None)
        field_type = FieldType.ENUM if enum_def else self.TYPE_MAP.get(raw_type, FieldType.RELATION)

        relation = None
        if field_type == FieldType.RELATION:
            relation = RelationSchema(
                model=raw_type,
                type=RelationType.ONE_TO_MANY if is_list else RelationType.ONE_TO_ONE,
                foreign_key=self._extract_foreign_key(line),
            )

        return FieldSchema(
            name=name,
            type=field_type,
            is_required="?" not in line,
            is_unique="@unique" in line,
            is_id="@id" in line,
            is_list=is_list,
            default=self._extract_default(line),
            enum_values=list(enum_def.values) if enum_def else None,
            relation=relation,
        )

    @staticmethod
    def _extract_default(line: str) -> Optional[str]:
        """Argument of @default(...), nested parentheses included"""
        start = line.find(_DEFAULT_ATTR)
        if start < 0:
            return None

        begin = start + len(_DEFAULT_ATTR)
        depth = 1
        for index in range(begin, len(line)):
            char = line[index]
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return line[begin:index].strip() or None
        return None

    @staticmethod
    def _extract_foreign_key(line: str) -> Optional[str]:
        relation_match = _RELATION_ATTR.search(line)
        if not relation_match:
            return None
        fk_match = _RELATION_FIELDS.search(relation_match.group(1))
        return fk_match.group(1) if fk_match else None
