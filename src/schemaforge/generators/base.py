"""
Base Generator Module
Shared interface and helpers for deterministic code generators
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Iterable

from ..config import GenerationConfig
from ..schemas import DatabaseSchema, GenerationTarget


class BaseGenerator(ABC):
    """
    Abstract base class for template generators

    render() must be a pure function of its inputs: the same schema and
    config always yield byte-identical output, and the schema is never
    modified.
    """

    target: GenerationTarget

    @abstractmethod
    def render(self, schema: DatabaseSchema, config: GenerationConfig) -> str:
        """Render the schema into source text"""
        pass


def quote(value: str) -> str:
    """TypeScript string literal"""
    return json.dumps(value)


def quote_all(values: Iterable[str], separator: str) -> str:
    return separator.join(quote(v) for v in values)


def doc_comment(text: str) -> str:
    """Single-line JSDoc block; newlines collapse and a closing */ is escaped"""
    body = " ".join(text.split()).replace("*/", "*\\/")
    return f"/** {body} */"
