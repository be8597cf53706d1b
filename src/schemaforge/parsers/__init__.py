"""
Parsers Package
Turns raw schema text into the intermediate representation.

Prisma and SQL are parsed deterministically. English requires an LLM call,
which lives in the orchestration layer.
"""
from typing import Optional, Union

from .base import BaseSchemaParser
from .detection import detect_format
from .prisma_parser import PrismaSchemaParser
from .sql_parser import SqlDdlParser, split_columns

from ..schemas import DatabaseSchema, InputFormat
from ..utils import UnknownFormatError

_prisma_parser = PrismaSchemaParser()
_sql_parser = SqlDdlParser()


def coerce_input_format(input_format: Union[InputFormat, str]) -> InputFormat:
    """Resolve a format tag, raising UnknownFormatError for anything unsupported"""
    if isinstance(input_format, InputFormat):
        return input_format
    try:
        return InputFormat(input_format)
    except ValueError:
        raise UnknownFormatError(input_format)


def parse_schema(text: str, input_format: Union[InputFormat, str]) -> Optional[DatabaseSchema]:
    """
    Parse raw schema input into the intermediate representation

    Args:
        text: Raw schema text
        input_format: prisma, sql or english

    Returns:
        DatabaseSchema, or None for english, signalling that the caller must
        use the LLM-backed adapter instead

    Raises:
        UnknownFormatError: If the format tag is not recognized
    """
    resolved = coerce_input_format(input_format)

    if resolved is InputFormat.PRISMA:
        return _prisma_parser.parse(text)
    elif resolved is InputFormat.SQL:
        return _sql_parser.parse(text)
    elif resolved is InputFormat.ENGLISH:
        return None

    raise UnknownFormatError(resolved)


__all__ = [
    "BaseSchemaParser",
    "PrismaSchemaParser",
    "SqlDdlParser",
    "split_columns",
    "detect_format",
    "coerce_input_format",
    "parse_schema",
]
