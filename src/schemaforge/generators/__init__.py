"""
Generators Package
Deterministic code generation from the intermediate representation.

Only zod and types are rendered from templates; trpc and react-form are
produced by the model-driven renderer in the orchestration layer.
"""
from typing import Optional, Union

from .base import BaseGenerator
from .zod_generator import ZodSchemaGenerator
from .typescript_generator import TypeScriptGenerator

from ..config import GenerationConfig
from ..schemas import DatabaseSchema, GenerationTarget
from ..utils import UnsupportedTargetError

# Targets that are generated deterministically, no LLM call needed
TEMPLATE_TARGETS = frozenset({GenerationTarget.ZOD, GenerationTarget.TYPES})

_zod_generator = ZodSchemaGenerator()
_typescript_generator = TypeScriptGenerator()


def coerce_target(target: Union[GenerationTarget, str]) -> GenerationTarget:
    """Resolve a target tag, raising UnsupportedTargetError for anything unknown"""
    if isinstance(target, GenerationTarget):
        return target
    try:
        return GenerationTarget(target)
    except ValueError:
        raise UnsupportedTargetError(target)


def is_template_target(target: Union[GenerationTarget, str]) -> bool:
    return coerce_target(target) in TEMPLATE_TARGETS


def generate_from_template(
    schema: DatabaseSchema,
    target: Union[GenerationTarget, str],
    config: Optional[GenerationConfig] = None
) -> str:
    """
    Render a deterministic target

    Raises:
        UnsupportedTargetError: For unknown targets and for model-driven
            targets (trpc, react-form)
    """
    resolved = coerce_target(target)
    config = config or GenerationConfig()

    if resolved is GenerationTarget.ZOD:
        return _zod_generator.render(schema, config)
    elif resolved is GenerationTarget.TYPES:
        return _typescript_generator.render(schema, config)

    raise UnsupportedTargetError(resolved)


__all__ = [
    "BaseGenerator",
    "ZodSchemaGenerator",
    "TypeScriptGenerator",
    "TEMPLATE_TARGETS",
    "coerce_target",
    "is_template_target",
    "generate_from_template",
]
