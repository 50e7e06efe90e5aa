"""Dialect import aggregation for generated model modules."""

from typing import Dict, Iterable, List, Set

from sqla_auto_generator.constants import DialectFamily, PROLOGUE_IMPORTS
from sqla_auto_generator.domain.type_mapping import DialectSymbol


def dialect_import_lines(symbols: Iterable[DialectSymbol]) -> List[str]:
    """
    One ``from sqlalchemy.dialects.<family> import ...`` line per family in use.

    Families are emitted in a fixed order and each family's names are sorted.
    """
    by_family: Dict[str, Set[str]] = {}
    for symbol in symbols:
        by_family.setdefault(symbol.family, set()).add(symbol.name)

    lines = []
    for family in DialectFamily.IMPORT_ORDER:
        names = by_family.get(family)
        if names:
            lines.append(f"from sqlalchemy.dialects.{family} import {', '.join(sorted(names))}")
    return lines


def build_import_block(symbols: Iterable[DialectSymbol]) -> str:
    """Fixed prologue imports followed by the dialect import lines."""
    return "\n".join(PROLOGUE_IMPORTS + dialect_import_lines(symbols))
