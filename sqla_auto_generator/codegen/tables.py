"""
Class and association-table renderers.

A table becomes a ``ClassDescriptor`` first: table arguments, rendered
column declarations and relationship attribute lines. The descriptor is then
rendered through the ``model_class.py.j2`` template.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from jinja2 import Environment

from sqla_auto_generator.codegen.base import (
    GenerationContext, Keyword, RenderResult, create_call, create_docstring_text,
    create_keyword, create_mapped_attribute, create_string_literal, render_template,
)
from sqla_auto_generator.codegen.columns import build_column, render_column
from sqla_auto_generator.constants import GenerationOptions, RelationshipDefaults
from sqla_auto_generator.domain.constraints import ConstraintAnalyzer, ConstraintType, TableConstraint
from sqla_auto_generator.domain.models import RelationshipKind, Table
from sqla_auto_generator.domain.naming import (
    relationship_attribute_name, scalar_attribute_name, to_pascal_case,
)
from sqla_auto_generator.domain.relationships import (
    AssociationTable, ClassifiedRelationship, default_schema,
)
from sqla_auto_generator.domain.type_mapping import DialectSymbol


logger = logging.getLogger(__name__)

LAZY_LOADING = create_keyword("lazy", create_string_literal(RelationshipDefaults.LAZY))


@dataclass(frozen=True)
class ClassDescriptor:
    """Pre-rendered pieces of one declarative model class."""

    class_name: str
    table_name: str
    table_args: Tuple[str, ...] = ()
    doc: Optional[str] = None
    columns: Tuple[str, ...] = ()
    relationships: Tuple[str, ...] = ()
    symbols: FrozenSet[DialectSymbol] = field(default_factory=frozenset)


def _quoted_columns(constraint: TableConstraint) -> List[str]:
    return [create_string_literal(name) for name in constraint.columns]


def render_constraint(constraint: TableConstraint) -> str:
    """Render a table-level constraint as a ``__table_args__`` element."""
    if constraint.constraint_type == ConstraintType.PRIMARY_KEY:
        return create_call("sa.PrimaryKeyConstraint", _quoted_columns(constraint))
    if constraint.constraint_type == ConstraintType.UNIQUE:
        return create_call(
            "sa.UniqueConstraint",
            _quoted_columns(constraint),
            [create_keyword("name", create_string_literal(constraint.name))],
        )
    return create_call("sa.Index", [create_string_literal(constraint.name)] + _quoted_columns(constraint))


def build_table_args(table: Table, schema: Optional[str]) -> List[str]:
    """
    Build the elements of a class's ``__table_args__`` tuple.

    Args:
        table: Table being rendered
        schema: Effective schema (the table's own, else the dialect default)

    Returns:
        Composite primary key, surviving constraints and indexes, then the
        schema dictionary; empty when there is nothing to declare
    """
    args = [render_constraint(c) for c in ConstraintAnalyzer().analyze_table_constraints(table)]
    if schema:
        args.append(f'{{"schema": {create_string_literal(schema)}}}')
    return args


def _relationship_line(attribute: str, target: Table, keywords: List[Keyword], collection: bool) -> str:
    target_class = to_pascal_case(target.name)
    annotation = f"list[{target_class}]" if collection else target_class
    return create_mapped_attribute(
        attribute,
        annotation,
        create_call("relationship", [create_string_literal(target_class)], keywords),
    )


def _back_populates(attribute: str) -> Keyword:
    return create_keyword("back_populates", create_string_literal(attribute))


def relationship_line_for(
    table: Table,
    rel: ClassifiedRelationship,
    context: GenerationContext,
) -> Optional[str]:
    """
    Render the attribute ``table`` declares for one relationship.

    Only the first matching side is rendered, so a self-referential
    relationship yields a single attribute.
    """
    if rel.kind == RelationshipKind.ONE_TO_MANY:
        if rel.one.table.id == table.id:
            cascade = rel.relationship.cascade or context.cascade
            return _relationship_line(
                relationship_attribute_name(rel.many.table.name),
                rel.many.table,
                [
                    _back_populates(scalar_attribute_name(rel.one.table.name)),
                    LAZY_LOADING,
                    create_keyword("cascade", create_string_literal(cascade)),
                ],
                collection=True,
            )
        if rel.many.table.id == table.id:
            return _relationship_line(
                scalar_attribute_name(rel.one.table.name),
                rel.one.table,
                [_back_populates(relationship_attribute_name(rel.many.table.name)), LAZY_LOADING],
                collection=False,
            )
        return None

    if rel.kind == RelationshipKind.ONE_TO_ONE:
        if rel.a.table.id == table.id:
            this, other = rel.a, rel.b
        elif rel.b.table.id == table.id:
            this, other = rel.b, rel.a
        else:
            return None
        return _relationship_line(
            scalar_attribute_name(other.table.name),
            other.table,
            [
                create_keyword("uselist", "False"),
                _back_populates(scalar_attribute_name(this.table.name)),
                LAZY_LOADING,
            ],
            collection=False,
        )

    if rel.a.table.id == table.id:
        this, other = rel.a, rel.b
    elif rel.b.table.id == table.id:
        this, other = rel.b, rel.a
    else:
        return None
    association = context.association_for(rel)
    return _relationship_line(
        relationship_attribute_name(other.table.name),
        other.table,
        [
            create_keyword("secondary", association.name),
            _back_populates(relationship_attribute_name(this.table.name)),
            LAZY_LOADING,
        ],
        collection=True,
    )


def build_relationship_lines(table: Table, context: GenerationContext) -> List[str]:
    """Relationship attribute lines of a table, in relationship order, without duplicates."""
    lines: List[str] = []
    for rel in context.relationships:
        if not rel.touches(table):
            continue
        line = relationship_line_for(table, rel, context)
        if line is not None and line not in lines:
            lines.append(line)
    return lines


def build_class(table: Table, context: GenerationContext) -> ClassDescriptor:
    """
    Build the descriptor of the model class for a non-view table.

    Args:
        table: Table to describe
        context: Generation context of the current run

    Returns:
        Class descriptor with every column already rendered
    """
    schema = table.schema or default_schema(context.diagram.database_type)
    is_composite_pk = table.has_composite_primary_key

    columns: List[str] = []
    symbols = set()
    for table_field in table.fields:
        descriptor = build_column(
            table_field,
            context.type_mapper,
            is_composite_pk=is_composite_pk,
            foreign_key=context.foreign_keys.get((table.id, table_field.id)),
        )
        rendered = render_column(descriptor)
        columns.append(rendered.text)
        symbols.update(rendered.symbols)

    return ClassDescriptor(
        class_name=to_pascal_case(table.name),
        table_name=table.name,
        table_args=tuple(build_table_args(table, schema)),
        doc=create_docstring_text(table.comments),
        columns=tuple(columns),
        relationships=tuple(build_relationship_lines(table, context)),
        symbols=frozenset(symbols),
    )


def render_class(table: Table, context: GenerationContext) -> RenderResult:
    """Render the model class of a table with the dialect symbols its columns use."""
    model = build_class(table, context)
    logger.debug(f"Rendering class {model.class_name} for table '{table.name}'")
    text = render_template(context.jinja_env, GenerationOptions.CLASS_TEMPLATE, model=model)
    return RenderResult(text=text, symbols=model.symbols)


def render_association_table(association: AssociationTable, env: Environment) -> RenderResult:
    """Render the ``Table(...)`` block of an association table."""
    text = render_template(env, GenerationOptions.ASSOCIATION_TEMPLATE, table=association)
    return RenderResult(text=text)
