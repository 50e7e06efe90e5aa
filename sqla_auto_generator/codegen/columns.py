"""
Column rendering: one ``mapped_column`` declaration per diagram field.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from sqla_auto_generator.codegen.base import (
    Keyword, RenderResult, create_call, create_comment_lines, create_keyword,
    create_mapped_attribute, create_string_literal,
)
from sqla_auto_generator.constants import TypeNames
from sqla_auto_generator.domain.models import Field
from sqla_auto_generator.domain.naming import sanitize_identifier
from sqla_auto_generator.domain.relationships import Endpoint
from sqla_auto_generator.domain.type_mapping import DialectSymbol, TypeMapper


_NOW_DEFAULT = re.compile(r"^now\(\)$", re.IGNORECASE)
_CURRENT_TIMESTAMP_DEFAULT = re.compile(r"current_timestamp", re.IGNORECASE)
_SEQUENCE_DEFAULT = re.compile(r"^nextval\(", re.IGNORECASE)
_NUMERIC_DEFAULT = re.compile(r"^\d+(\.\d+)?$")
_QUOTED_DEFAULT = re.compile(r"^'.*'$|^\".*\"$", re.DOTALL)
_SURROUNDING_QUOTES = re.compile(r"^['\"]|['\"]$")
_CREATED_AT_NAME = re.compile(r"(^|_)created_at$")
_UPDATED_AT_NAME = re.compile(r"(^|_)updated_at$")

SERVER_NOW = "sa.func.now()"


@dataclass(frozen=True)
class ColumnDescriptor:
    """Everything needed to render one ``mapped_column`` declaration."""

    attribute: str
    annotation: str
    args: Tuple[str, ...]
    keywords: Tuple[Keyword, ...]
    comment_lines: Tuple[str, ...] = ()
    symbols: FrozenSet[DialectSymbol] = field(default_factory=frozenset)


def _escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def derive_server_default(default: str) -> str:
    """
    Translate a free-text declared default into a ``server_default`` expression.

    Rules, in order: ``now()``/``current_timestamp`` become the SQL current
    timestamp; sequence calls and numeric literals are passed through; quoted
    literals are re-quoted as SQL string literals; anything else is passed
    through with its double quotes escaped.
    """
    value = default.strip()
    if _NOW_DEFAULT.match(value) or _CURRENT_TIMESTAMP_DEFAULT.search(value):
        literal = "CURRENT_TIMESTAMP"
    elif _SEQUENCE_DEFAULT.match(value):
        literal = _escape(value)
    elif _NUMERIC_DEFAULT.match(value):
        literal = value
    elif _QUOTED_DEFAULT.match(value):
        literal = "'" + _escape(_SURROUNDING_QUOTES.sub("", value)) + "'"
    else:
        literal = _escape(value)
    return create_call("sa.text", [create_string_literal(literal)])


def _default_keywords(field: Field) -> List[Keyword]:
    keywords: List[Keyword] = []
    if field.default and not field.increment:
        keywords.append(create_keyword("server_default", derive_server_default(field.default)))

    # Timestamp conventions apply only when nothing was declared
    if not field.default:
        name = field.name.lower()
        if _CREATED_AT_NAME.search(name):
            keywords.append(create_keyword("server_default", SERVER_NOW))
        if _UPDATED_AT_NAME.search(name):
            keywords.append(create_keyword("server_default", SERVER_NOW))
            keywords.append(create_keyword("onupdate", SERVER_NOW))
    return keywords


def build_column(
    field: Field,
    type_mapper: TypeMapper,
    is_composite_pk: bool = False,
    foreign_key: Optional[Endpoint] = None,
) -> ColumnDescriptor:
    """
    Build the column descriptor of a field.

    Args:
        field: Field to describe
        type_mapper: Mapper bound to the diagram's dialect and enums
        is_composite_pk: Whether the owning table has a composite primary key
        foreign_key: Endpoint referenced by this field, if it holds a foreign key

    Returns:
        Column descriptor with the dialect symbols its type needs
    """
    storage_type = type_mapper.resolve_storage_type(field)
    args = [storage_type.expression]
    keywords: List[Keyword] = []

    if field.primary_key and not is_composite_pk:
        keywords.append(create_keyword("primary_key", "True"))
    if field.increment:
        keywords.append(create_keyword("autoincrement", "True"))
    if field.nullable is False:
        keywords.append(create_keyword("nullable", "False"))
    if field.unique and not field.primary_key:
        keywords.append(create_keyword("unique", "True"))

    keywords.extend(_default_keywords(field))

    if foreign_key is not None:
        args.append(create_call("sa.ForeignKey", [create_string_literal(foreign_key.qualified_reference)]))
        keywords.append(create_keyword("index", "True"))

    if field.type_name == TypeNames.UUID:
        keywords.append(create_keyword("default", "uuid.uuid4"))

    return ColumnDescriptor(
        attribute=sanitize_identifier(field.name),
        annotation=type_mapper.resolve_annotation(field),
        args=tuple(args),
        keywords=tuple(keywords),
        comment_lines=tuple(create_comment_lines(field.comments)),
        symbols=storage_type.symbols,
    )


def render_column(column: ColumnDescriptor) -> RenderResult:
    """Render comment lines and the ``mapped_column`` declaration of a column."""
    declaration = create_mapped_attribute(
        column.attribute,
        column.annotation,
        create_call("mapped_column", column.args, column.keywords),
    )
    text = "\n".join(list(column.comment_lines) + [declaration])
    return RenderResult(text=text, symbols=column.symbols)
