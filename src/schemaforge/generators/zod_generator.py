"""
Zod Schema Generator
Deterministic rendering of the IR into Zod validation schemas:
full, create and update schemas per model plus inferred types.
"""
from __future__ import annotations

from typing import List

from .base import BaseGenerator, doc_comment, quote_all
from ..config import GenerationConfig
from ..schemas import (
    DatabaseSchema,
    EnumSchema,
    FieldSchema,
    FieldType,
    GenerationTarget,
    ModelSchema,
)
from ..utils.naming import lower_first


class ZodSchemaGenerator(BaseGenerator):
    """Renders `schemas.ts` content"""

    target = GenerationTarget.ZOD

    def render(self, schema: DatabaseSchema, config: GenerationConfig) -> str:
        lines: List[str] = ['import { z } from "zod";', ""]

        for enum_def in schema.enums:
            self._render_enum(lines, enum_def, config)

        for model in schema.models:
            self._render_model(lines, model, schema, config)

        return "\n".join(lines)

    def _render_enum(self, lines: List[str], enum_def: EnumSchema, config: GenerationConfig) -> None:
        schema_name = f"{lower_first(enum_def.name)}Schema"
        if config.include_comments:
            lines.append(doc_comment(f"{enum_def.name} enum values"))
        lines.append(f"export const {schema_name} = z.enum([{quote_all(enum_def.values, ', ')}]);")
        lines.append(f"export type {enum_def.name} = z.infer<typeof {schema_name}>;")
        lines.append("")

    def _render_model(
        self,
        lines: List[str],
        model: ModelSchema,
        schema: DatabaseSchema,
        config: GenerationConfig
    ) -> None:
        name = model.name
        full_schema = f"{lower_first(name)}Schema"

        if config.include_comments:
            lines.append(doc_comment(f"Full {name} schema with all fields"))
        self._render_object(lines, full_schema, model.data_fields, schema, config)

        if config.include_comments:
            lines.append(doc_comment(f"Schema for creating a new {name}"))
        self._render_object(lines, f"create{name}Schema", model.create_fields, schema, config)

        if config.include_comments:
            lines.append(doc_comment(f"Schema for updating a {name} (all fields optional)"))
        lines.append(f"export const update{name}Schema = create{name}Schema.partial();")
        lines.append("")

        lines.append(f"export type {name} = z.infer<typeof {full_schema}>;")
        lines.append(f"export type Create{name}Input = z.infer<typeof create{name}Schema>;")
        lines.append(f"export type Update{name}Input = z.infer<typeof update{name}Schema>;")
        lines.append("")

    def _render_object(
        self,
        lines: List[str],
        const_name: str,
        fields: List[FieldSchema],
        schema: DatabaseSchema,
        config: GenerationConfig
    ) -> None:
        lines.append(f"export const {const_name} = z.object({{")
        for field in fields:
            lines.append(f"  {field.name}: {self.field_type(field, schema, config.strict_mode)},")
        lines.append("});")
        lines.append("")

    def field_type(self, field: FieldSchema, schema: DatabaseSchema, strict_mode: bool) -> str:
        """Validator expression for a field, list and optional wrappers applied"""
        base = self._base_type(field, schema, strict_mode)

        if field.is_list:
            base = f"z.array({base})"

        if not field.is_required:
            base += ".optional()"

        return base

    def _base_type(self, field: FieldSchema, schema: DatabaseSchema, strict_mode: bool) -> str:
        if field.is_id:
            return "z.string().uuid()"

        field_type = field.type
        if field_type == FieldType.STRING:
            return "z.string().min(1)" if strict_mode and field.is_required else "z.string()"
        elif field_type == FieldType.NUMBER:
            return "z.number()"
        elif field_type == FieldType.BOOLEAN:
            return "z.boolean()"
        elif field_type in (FieldType.DATE, FieldType.DATETIME):
            return "z.coerce.date()"
        elif field_type == FieldType.ENUM:
            shared = schema.find_enum_by_values(field.enum_values)
            if shared is not None:
                return f"{lower_first(shared.name)}Schema"
            if field.enum_values:
                return f"z.enum([{quote_all(field.enum_values, ', ')}])"
            return "z.string()"
        elif field_type == FieldType.JSON:
            return "z.record(z.string(), z.unknown())"
        return "z.string()"
