"""
Model-Driven Components
English -> IR parsing and the non-template generation targets, both
delegated to an LLM client and checked at the boundary.
"""
from __future__ import annotations

import re
from typing import Optional, Union

from ..config import GenerationConfig, LLMConfig
from ..llm_client import BaseLLMClient
from ..prompts import build_generation_prompt, build_parse_prompt
from ..schemas import DatabaseSchema, GenerationTarget, validate_schema
from ..utils import get_logger, SchemaValidationError

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"^```[\w-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a single markdown fence wrapping the whole response, if present"""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


class NaturalLanguageAdapter:
    """
    Turns a plain-English data model description into a validated IR

    The model output is untrusted: anything that does not validate as a
    DatabaseSchema is rejected with SchemaValidationError.
    """

    def __init__(self, client: BaseLLMClient, llm_config: Optional[LLMConfig] = None):
        self.client = client
        self.llm_config = llm_config or LLMConfig()

    def parse(self, description: str) -> DatabaseSchema:
        response = self.client.invoke_with_retry(
            build_parse_prompt(description),
            temperature=self.llm_config.parse_temperature,
        )
        raw = strip_code_fence(response.content)

        try:
            schema = validate_schema(raw)
        except SchemaValidationError as e:
            logger.warning(
                "Model response rejected at the IR boundary",
                extra={"extra_fields": {
                    "problems": len(e.validation_errors),
                    "response_chars": len(raw),
                }}
            )
            e.suggestions.append("Try again or use Prisma/SQL format")
            raise

        logger.debug(
            "Parsed English description",
            extra={"extra_fields": {"models": len(schema.models), "enums": len(schema.enums)}}
        )
        return schema


class ModelDrivenRenderer:
    """Renders targets without a template generator (trpc, react-form) via the LLM"""

    def __init__(self, client: BaseLLMClient, llm_config: Optional[LLMConfig] = None):
        self.client = client
        self.llm_config = llm_config or LLMConfig()

    def render(
        self,
        schema: DatabaseSchema,
        target: Union[GenerationTarget, str],
        config: Optional[GenerationConfig] = None
    ) -> str:
        prompt = build_generation_prompt(schema, target, config)
        response = self.client.invoke_with_retry(
            prompt,
            temperature=self.llm_config.generation_temperature,
        )
        return strip_code_fence(response.content)
