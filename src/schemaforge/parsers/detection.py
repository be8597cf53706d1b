"""
Input format detection
Cheap structural signatures, not a grammar check.
"""
from __future__ import annotations

import re

from ..schemas import InputFormat

_PRISMA_BLOCK = re.compile(r"^(model|datasource|generator|enum)\s+\w+\s*\{", re.MULTILINE)
_SQL_DDL = re.compile(r"CREATE\s+(TABLE|TYPE)", re.IGNORECASE)


def detect_format(text: str) -> InputFormat:
    """
    Classify raw schema text; first match wins

    A Prisma block header on any line means Prisma, a CREATE TABLE/TYPE
    anywhere means SQL, and everything else is treated as English.
    """
    trimmed = text.strip()

    if _PRISMA_BLOCK.search(trimmed):
        return InputFormat.PRISMA

    if _SQL_DDL.search(trimmed):
        return InputFormat.SQL

    return InputFormat.ENGLISH
