"""
Relationship analysis domain logic for SQLA Auto Generator.

This module classifies diagram relationships by cardinality and derives the
structures the renderers need from them: where each foreign key lives and
which association tables implement many-to-many relationships.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from sqla_auto_generator.constants import DEFAULT_SCHEMAS, GenerationOptions
from sqla_auto_generator.domain.models import (
    Cardinality, DatabaseType, Diagram, Field, Relationship, RelationshipKind, Table,
)
from sqla_auto_generator.domain.naming import association_table_name, sanitize_identifier
from sqla_auto_generator.exceptions import raise_reference_error


logger = logging.getLogger(__name__)

ForeignKeyMap = Dict[Tuple[str, str], "Endpoint"]


@dataclass(frozen=True)
class Endpoint:
    """One resolved end of a relationship."""

    table: Table
    field: Field

    @property
    def qualified_reference(self) -> str:
        """``schema.table.field`` or ``table.field`` when the table has no schema."""
        prefix = f"{self.table.schema}." if self.table.schema else ""
        return f"{prefix}{self.table.name}.{self.field.name}"


@dataclass(frozen=True)
class ClassifiedRelationship:
    """
    A relationship with both endpoints resolved and its kind decided.

    For one-to-many relationships ``first`` is the "one" side and ``second``
    the "many" side, whatever the declaration order. For one-to-one and
    many-to-many relationships they keep the declared (source, target) order.
    """

    kind: RelationshipKind
    first: Endpoint
    second: Endpoint
    relationship: Relationship
    ordinal: int

    @property
    def one(self) -> Endpoint:
        return self.first

    @property
    def many(self) -> Endpoint:
        return self.second

    @property
    def a(self) -> Endpoint:
        return self.first

    @property
    def b(self) -> Endpoint:
        return self.second

    def touches(self, table: Table) -> bool:
        """Check if either endpoint is ``table``."""
        return self.first.table.id == table.id or self.second.table.id == table.id


@dataclass(frozen=True)
class AssociationColumn:
    """A column of an association table, both primary key and foreign key."""

    name: str
    target: Endpoint


@dataclass(frozen=True)
class AssociationTable:
    """Join table synthesized for one many-to-many relationship."""

    name: str
    left: AssociationColumn
    right: AssociationColumn
    schema: Optional[str]
    ordinal: int

    @property
    def columns(self) -> Tuple[AssociationColumn, AssociationColumn]:
        return (self.left, self.right)

    @property
    def table_pair(self) -> Tuple[str, str]:
        """Ids of the joined tables, in relationship side order."""
        return (self.left.target.table.id, self.right.target.table.id)


class RelationshipClassifier:
    """
    Resolves relationship endpoints against a diagram and classifies them.

    Lookups are by id; a relationship naming an unknown table or field raises
    ``DiagramReferenceError``.
    """

    def __init__(self, diagram: Diagram):
        """Initialize classifier with the diagram to resolve against."""
        self.diagram = diagram

    def classify_all(self) -> List[ClassifiedRelationship]:
        """Classify every relationship of the diagram in declaration order."""
        return [
            self.classify(relationship, ordinal)
            for ordinal, relationship in enumerate(self.diagram.relationships)
        ]

    def classify(self, relationship: Relationship, ordinal: int = 0) -> ClassifiedRelationship:
        """
        Classify a single relationship.

        Args:
            relationship: Relationship to classify
            ordinal: Position of the relationship in the diagram

        Returns:
            The classified relationship
        """
        source = self._resolve(relationship, relationship.source_table_id, relationship.source_field_id)
        target = self._resolve(relationship, relationship.target_table_id, relationship.target_field_id)

        source_cardinality = Cardinality(relationship.source_cardinality)
        target_cardinality = Cardinality(relationship.target_cardinality)

        if source_cardinality == Cardinality.ONE and target_cardinality == Cardinality.MANY:
            kind, first, second = RelationshipKind.ONE_TO_MANY, source, target
        elif source_cardinality == Cardinality.MANY and target_cardinality == Cardinality.ONE:
            kind, first, second = RelationshipKind.ONE_TO_MANY, target, source
        elif source_cardinality == Cardinality.ONE and target_cardinality == Cardinality.ONE:
            kind, first, second = RelationshipKind.ONE_TO_ONE, source, target
        else:
            kind, first, second = RelationshipKind.MANY_TO_MANY, source, target

        logger.debug(
            f"Relationship #{ordinal} {source.table.name}.{source.field.name} -> "
            f"{target.table.name}.{target.field.name} classified as {kind.value}"
        )
        return ClassifiedRelationship(
            kind=kind, first=first, second=second,
            relationship=relationship, ordinal=ordinal,
        )

    def _resolve(self, relationship: Relationship, table_id: str, field_id: str) -> Endpoint:
        table = self.diagram.get_table(table_id)
        if table is None:
            raise_reference_error(
                f"Relationship references unknown table id '{table_id}'",
                relationship_id=relationship.id,
                table_id=table_id,
            )
        field = table.get_field(field_id)
        if field is None:
            raise_reference_error(
                f"Relationship references unknown field id '{field_id}' in table '{table.name}'",
                relationship_id=relationship.id,
                table_id=table_id,
                field_id=field_id,
            )
        return Endpoint(table=table, field=field)


def resolve_foreign_keys(classified: Sequence[ClassifiedRelationship]) -> ForeignKeyMap:
    """
    Map each foreign-key holding (table id, field id) to the endpoint it references.

    One-to-many keys live on the many side, one-to-one keys on the first
    declared side; many-to-many relationships register nothing here. A field
    claimed twice keeps the later registration.
    """
    foreign_keys: ForeignKeyMap = {}
    for rel in classified:
        if rel.kind == RelationshipKind.ONE_TO_MANY:
            holder, referenced = rel.many, rel.one
        elif rel.kind == RelationshipKind.ONE_TO_ONE:
            holder, referenced = rel.a, rel.b
        else:
            continue
        foreign_keys[(holder.table.id, holder.field.id)] = referenced
    return foreign_keys


def default_schema(database_type: Union[DatabaseType, str]) -> Optional[str]:
    """Default schema of a database type, if it has one."""
    return DEFAULT_SCHEMAS.get(DatabaseType(database_type).value)


def build_association_tables(
    classified: Sequence[ClassifiedRelationship],
    database_type: Union[DatabaseType, str],
) -> List[AssociationTable]:
    """
    Synthesize one association table per many-to-many relationship.

    Args:
        classified: Classified relationships in declaration order
        database_type: Target database, for the default schema

    Returns:
        Association tables in relationship declaration order
    """
    tables: List[AssociationTable] = []
    for rel in classified:
        if rel.kind != RelationshipKind.MANY_TO_MANY:
            continue
        name = association_table_name(
            rel.a.table.name, rel.b.table.name, rel.ordinal,
            prefix=GenerationOptions.ASSOCIATION_PREFIX,
        )
        schema = rel.a.table.schema or rel.b.table.schema or default_schema(database_type)
        association = AssociationTable(
            name=name,
            left=AssociationColumn(name=sanitize_identifier(rel.a.field.name), target=rel.a),
            right=AssociationColumn(name=sanitize_identifier(rel.b.field.name), target=rel.b),
            schema=schema,
            ordinal=rel.ordinal,
        )
        logger.debug(f"Synthesized association table '{name}' for relationship #{rel.ordinal}")
        tables.append(association)
    return tables


def index_associations_by_pair(
    associations: Sequence[AssociationTable],
) -> Dict[Tuple[str, str], AssociationTable]:
    """Map each joined table pair to the first association table built for it."""
    by_pair: Dict[Tuple[str, str], AssociationTable] = {}
    for association in associations:
        by_pair.setdefault(association.table_pair, association)
    return by_pair
