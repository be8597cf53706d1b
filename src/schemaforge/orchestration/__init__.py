"""
Orchestration Package for SchemaForge
Coordinates parsing and generation across deterministic and model-driven paths
"""
from .model_driven import (
    NaturalLanguageAdapter,
    ModelDrivenRenderer,
    strip_code_fence,
)
from .pipeline import (
    SchemaPipeline,
    ParseResult,
    GenerationResult,
    ZERO_MODELS_WARNING,
)
from ..generators import generate_from_template, is_template_target

__all__ = [
    "SchemaPipeline",
    "ParseResult",
    "GenerationResult",
    "ZERO_MODELS_WARNING",
    "NaturalLanguageAdapter",
    "ModelDrivenRenderer",
    "strip_code_fence",
    "generate_from_template",
    "is_template_target",
]
