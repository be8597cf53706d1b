"""
Base Schema Parser Module
Defines the interface shared by the deterministic schema parsers
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..schemas import DatabaseSchema, InputFormat


class BaseSchemaParser(ABC):
    """
    Abstract base class for deterministic schema parsers

    Implementations must be stateless: every call to parse() works on local
    data only, so a single instance can be shared across threads. Parsers
    degrade instead of failing; anything they cannot recognize is left out
    of the result.
    """

    input_format: InputFormat

    @abstractmethod
    def parse(self, text: str) -> DatabaseSchema:
        """Convert raw schema text into the intermediate representation"""
        pass
