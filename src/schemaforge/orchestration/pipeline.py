"""
SchemaForge Orchestration Pipeline
Coordinates format detection, parsing and code generation

Deterministic work (Prisma/SQL parsing, zod/types rendering) runs locally.
English input and the trpc/react-form targets go through the LLM client.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..config import GenerationConfig, LLMConfig
from ..generators import coerce_target, generate_from_template, is_template_target
from ..llm_client import BaseLLMClient
from ..parsers import coerce_input_format, detect_format, parse_schema
from ..schemas import DatabaseSchema, GenerationTarget, InputFormat
from ..utils import (
    get_logger,
    log_context,
    log_operation,
    ConfigurationError,
    SchemaForgeError,
    SchemaForgeMetrics,
)
from .model_driven import ModelDrivenRenderer, NaturalLanguageAdapter

logger = get_logger(__name__)

ZERO_MODELS_WARNING = "No models found in non-empty input; check the input format"


@dataclass
class ParseResult:
    """Outcome of parsing raw schema input"""
    schema: DatabaseSchema
    input_format: InputFormat
    detected: bool = False
    duration_ms: float = 0.0
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema.to_dict(),
            "input_format": self.input_format.value,
            "detected": self.detected,
            "duration_ms": self.duration_ms,
            "warnings": list(self.warnings),
        }


@dataclass
class GenerationResult:
    """Outcome of rendering one target"""
    code: str
    target: GenerationTarget
    deterministic: bool
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "target": self.target.value,
            "deterministic": self.deterministic,
            "duration_ms": self.duration_ms,
        }


class SchemaPipeline:
    """
    Main entry point for turning schema input into generated code

    Usage:
        pipeline = SchemaPipeline()
        parsed = pipeline.parse(prisma_text)
        result = pipeline.generate(parsed.schema, "zod")

        # English input and model-driven targets need a client
        pipeline = SchemaPipeline(llm_client=get_llm_client(config.llm))
    """

    def __init__(
        self,
        llm_client: Optional[BaseLLMClient] = None,
        llm_config: Optional[LLMConfig] = None,
    ):
        self.llm_client = llm_client
        self.llm_config = llm_config or LLMConfig()
        self._nl_adapter: Optional[NaturalLanguageAdapter] = None
        self._renderer: Optional[ModelDrivenRenderer] = None

    def _require_client(self, purpose: str) -> BaseLLMClient:
        if self.llm_client is None:
            raise ConfigurationError(
                f"An LLM client is required for {purpose}",
                config_key="llm",
            )
        return self.llm_client

    @property
    def nl_adapter(self) -> NaturalLanguageAdapter:
        """Get or create the English -> IR adapter"""
        if self._nl_adapter is None:
            client = self._require_client("English input")
            self._nl_adapter = NaturalLanguageAdapter(client, self.llm_config)
        return self._nl_adapter

    @property
    def renderer(self) -> ModelDrivenRenderer:
        """Get or create the model-driven renderer"""
        if self._renderer is None:
            client = self._require_client("model-driven targets")
            self._renderer = ModelDrivenRenderer(client, self.llm_config)
        return self._renderer

    def parse(
        self,
        text: str,
        input_format: Optional[Union[InputFormat, str]] = None
    ) -> ParseResult:
        """
        Parse raw schema input

        Args:
            text: Raw schema text
            input_format: prisma, sql or english; detected when omitted

        Returns:
            ParseResult with the IR and any warnings

        Raises:
            UnknownFormatError: For an unrecognized format tag
            ConfigurationError: For English input without an LLM client
            SchemaValidationError: If the model output is not a valid IR
        """
        detected = input_format is None
        resolved = detect_format(text) if detected else coerce_input_format(input_format)

        with log_context(request_id=str(uuid.uuid4()), component="parse"):
            start = time.time()
            try:
                with log_operation(logger, "parse", input_format=resolved.value, detected=detected) as ctx:
                    schema = parse_schema(text, resolved)
                    if schema is None:
                        schema = self.nl_adapter.parse(text)
                    ctx["models"] = len(schema.models)
                    ctx["enums"] = len(schema.enums)
            except SchemaForgeError as e:
                SchemaForgeMetrics.record_error(type(e).__name__, e.category.value)
                raise

            duration = time.time() - start
            SchemaForgeMetrics.record_parse(duration, resolved.value, len(schema.models))

            warnings = []
            if not schema.models and text.strip():
                logger.warning(
                    ZERO_MODELS_WARNING,
                    extra={"extra_fields": {"input_format": resolved.value, "input_chars": len(text)}}
                )
                warnings.append(ZERO_MODELS_WARNING)

            return ParseResult(
                schema=schema,
                input_format=resolved,
                detected=detected,
                duration_ms=round(duration * 1000, 2),
                warnings=warnings,
            )

    def generate(
        self,
        schema: DatabaseSchema,
        target: Union[GenerationTarget, str],
        config: Optional[GenerationConfig] = None
    ) -> GenerationResult:
        """
        Render the schema as the given target

        zod and types are rendered from templates; trpc and react-form are
        produced by the model-driven renderer.

        Raises:
            UnsupportedTargetError: For an unknown target
            ConfigurationError: For a model-driven target without an LLM client
        """
        config = config or GenerationConfig()

        with log_context(request_id=str(uuid.uuid4()), component="generate"):
            start = time.time()
            try:
                resolved = coerce_target(target)
                deterministic = is_template_target(resolved)
                with log_operation(logger, "generate", target=resolved.value, deterministic=deterministic) as ctx:
                    if deterministic:
                        code = generate_from_template(schema, resolved, config)
                    else:
                        code = self.renderer.render(schema, resolved, config)
                    ctx["output_chars"] = len(code)
            except SchemaForgeError as e:
                SchemaForgeMetrics.record_error(type(e).__name__, e.category.value)
                raise

            duration = time.time() - start
            SchemaForgeMetrics.record_generation(duration, resolved.value, deterministic)

            return GenerationResult(
                code=code,
                target=resolved,
                deterministic=deterministic,
                duration_ms=round(duration * 1000, 2),
            )
