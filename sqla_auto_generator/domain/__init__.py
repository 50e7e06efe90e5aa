"""
Domain module for SQLA Auto Generator.

This module contains the diagram model and the pure analysis logic that the
code generators build on: naming, type mapping, relationship classification
and constraint planning.
"""

from .models import (
    Cardinality,
    CustomType,
    CustomTypeKind,
    DatabaseType,
    Diagram,
    Field,
    FieldType,
    Index,
    Relationship,
    RelationshipKind,
    Table,
)

from .naming import (
    to_pascal_case,
    sanitize_identifier,
    pluralize,
    relationship_attribute_name,
    scalar_attribute_name,
    association_table_name,
)

from .type_mapping import (
    DialectSymbol,
    EnumTypeInfo,
    StorageType,
    TypeMapper,
    build_enum_type_map,
    resolve_annotation,
)

from .relationships import (
    AssociationColumn,
    AssociationTable,
    ClassifiedRelationship,
    Endpoint,
    RelationshipClassifier,
    build_association_tables,
    default_schema,
    index_associations_by_pair,
    resolve_foreign_keys,
)

from .constraints import (
    ConstraintAnalyzer,
    ConstraintType,
    TableConstraint,
)

__all__ = [
    # Core models
    'Cardinality',
    'CustomType',
    'CustomTypeKind',
    'DatabaseType',
    'Diagram',
    'Field',
    'FieldType',
    'Index',
    'Relationship',
    'RelationshipKind',
    'Table',

    # Naming
    'to_pascal_case',
    'sanitize_identifier',
    'pluralize',
    'relationship_attribute_name',
    'scalar_attribute_name',
    'association_table_name',

    # Type mapping
    'DialectSymbol',
    'EnumTypeInfo',
    'StorageType',
    'TypeMapper',
    'build_enum_type_map',
    'resolve_annotation',

    # Relationships
    'AssociationColumn',
    'AssociationTable',
    'ClassifiedRelationship',
    'Endpoint',
    'RelationshipClassifier',
    'build_association_tables',
    'default_schema',
    'index_associations_by_pair',
    'resolve_foreign_keys',

    # Constraints
    'ConstraintAnalyzer',
    'ConstraintType',
    'TableConstraint',
]
