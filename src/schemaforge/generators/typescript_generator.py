"""
TypeScript Type Definition Generator
Deterministic rendering of the IR into TypeScript declarations:
literal-union enums, branded ids, entity interfaces, create/update
inputs, WithRelations interfaces and pagination/sorting utility types.
"""
from __future__ import annotations

from typing import List

from .base import BaseGenerator, doc_comment, quote_all
from ..config import GenerationConfig
from ..schemas import (
    DatabaseSchema,
    FieldSchema,
    FieldType,
    GenerationTarget,
    ModelSchema,
)

UTILITY_TYPES = [
    "// ─── Utility Types ───────────────────────────────────────────────────────",
    "",
    "export interface Paginated<T> {",
    "  items: T[];",
    "  nextCursor?: string;",
    "  total: number;",
    "}",
    "",
    'export type SortDirection = "asc" | "desc";',
    "",
    "export interface SortBy<T> {",
    "  field: keyof T;",
    "  direction: SortDirection;",
    "}",
]


class TypeScriptGenerator(BaseGenerator):
    """Renders `types.ts` content"""

    target = GenerationTarget.TYPES

    def render(self, schema: DatabaseSchema, config: GenerationConfig) -> str:
        comments = config.include_comments
        lines: List[str] = []

        for enum_def in schema.enums:
            if comments:
                lines.append(doc_comment(f"{enum_def.name} enum"))
            lines.append(f"export type {enum_def.name} = {quote_all(enum_def.values, ' | ')};")
            lines.append("")

        for model in schema.models:
            lines.append(f'export type {model.name}Id = string & {{ __brand: "{model.name}Id" }};')
        lines.append("")

        for model in schema.models:
            if comments:
                lines.append(doc_comment(f"Full {model.name} entity"))
            lines.append(f"export interface {model.name} {{")
            for field in model.data_fields:
                if comments and field.description:
                    lines.append(f"  {doc_comment(field.description)}")
                lines.append(self._member(field, model, schema))
            lines.append("}")
            lines.append("")

        for model in schema.models:
            if comments:
                lines.append(doc_comment(f"Input for creating a new {model.name}"))
            lines.append(f"export interface Create{model.name}Input {{")
            for field in model.create_fields:
                lines.append(self._member(field, model, schema))
            lines.append("}")
            lines.append("")

        for model in schema.models:
            if comments:
                lines.append(doc_comment(f"Input for updating a {model.name} (all fields optional)"))
            lines.append(f"export type Update{model.name}Input = Partial<Create{model.name}Input>;")
            lines.append("")

        for model in schema.models:
            self._render_with_relations(lines, model, comments)

        lines.extend(UTILITY_TYPES)

        return "\n".join(lines)

    def _render_with_relations(self, lines: List[str], model: ModelSchema, comments: bool) -> None:
        relation_fields = model.relation_fields
        if not relation_fields:
            return

        if comments:
            lines.append(doc_comment(f"{model.name} with all relations loaded"))
        lines.append(f"export interface {model.name}WithRelations extends {model.name} {{")
        for field in relation_fields:
            related = field.relation.model
            if field.is_list:
                lines.append(f"  {field.name}: {related}[];")
            else:
                optional = "" if field.is_required else "?"
                lines.append(f"  {field.name}{optional}: {related};")
        lines.append("}")
        lines.append("")

    def _member(self, field: FieldSchema, model: ModelSchema, schema: DatabaseSchema) -> str:
        optional = "" if field.is_required else "?"
        return f"  {field.name}{optional}: {self.field_type(field, model, schema)};"

    def field_type(self, field: FieldSchema, model: ModelSchema, schema: DatabaseSchema) -> str:
        base = self._base_type(field, model, schema)
        if field.is_list:
            if " | " in base:
                base = f"({base})"
            base += "[]"
        return base

    def _base_type(self, field: FieldSchema, model: ModelSchema, schema: DatabaseSchema) -> str:
        if field.is_id:
            return f"{model.name}Id"

        field_type = field.type
        if field_type == FieldType.STRING:
            return "string"
        elif field_type == FieldType.NUMBER:
            return "number"
        elif field_type == FieldType.BOOLEAN:
            return "boolean"
        elif field_type in (FieldType.DATE, FieldType.DATETIME):
            return "Date"
        elif field_type == FieldType.ENUM:
            shared = schema.find_enum_by_values(field.enum_values)
            if shared is not None:
                return shared.name
            if field.enum_values:
                return quote_all(field.enum_values, " | ")
            return "string"
        elif field_type == FieldType.JSON:
            return "Record<string, unknown>"
        return "string"
