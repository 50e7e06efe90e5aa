"""
Core domain models for SQLA Auto Generator.

These models describe the relational diagram the generator renders. They are
independent of the input format and of the generated code, and they are
frozen: the generator reads a diagram but never mutates it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union


class DatabaseType(str, Enum):
    """Target database engines."""

    GENERIC = "generic"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQL_SERVER = "sql_server"
    MARIADB = "mariadb"
    SQLITE = "sqlite"
    CLICKHOUSE = "clickhouse"
    COCKROACHDB = "cockroachdb"
    ORACLE = "oracle"


class Cardinality(str, Enum):
    """Cardinality of one relationship end."""

    ONE = "one"
    MANY = "many"


class CustomTypeKind(str, Enum):
    """Kinds of user-defined database types."""

    ENUM = "enum"
    COMPOSITE = "composite"


class RelationshipKind(Enum):
    """Classified shape of a relationship."""

    ONE_TO_MANY = "one_to_many"
    ONE_TO_ONE = "one_to_one"
    MANY_TO_MANY = "many_to_many"


@dataclass(frozen=True)
class FieldType:
    """Declared type of a field, as picked in the diagram editor."""

    name: str
    id: Optional[str] = None


@dataclass(frozen=True)
class Field:
    """
    A table column.

    ``default`` is free text exactly as typed by the user (``now()``,
    ``'draft'``, ``nextval('seq')``...). ``character_maximum_length`` may be a
    number or its string form.
    """

    id: str
    name: str
    type: FieldType
    primary_key: bool = False
    nullable: bool = True
    unique: bool = False
    increment: bool = False
    default: Optional[str] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    character_maximum_length: Optional[Union[int, str]] = None
    comments: Optional[str] = None

    @property
    def type_name(self) -> str:
        """Declared type name, lower-cased for matching."""
        return self.type.name.lower()


@dataclass(frozen=True)
class Index:
    """A named index over an ordered list of field ids."""

    name: str
    field_ids: Sequence[str] = field(default_factory=tuple)
    unique: bool = False
    is_primary_key: bool = False
    id: Optional[str] = None


@dataclass(frozen=True)
class Table:
    """A table (or view) of the diagram."""

    id: str
    name: str
    fields: Sequence[Field] = field(default_factory=tuple)
    indexes: Sequence[Index] = field(default_factory=tuple)
    schema: Optional[str] = None
    is_view: bool = False
    comments: Optional[str] = None

    @property
    def primary_key_fields(self) -> Tuple[Field, ...]:
        """Primary-key flagged fields in declared order."""
        return tuple(f for f in self.fields if f.primary_key)

    @property
    def has_composite_primary_key(self) -> bool:
        """Check if the table has a composite primary key."""
        return len(self.primary_key_fields) > 1

    def get_field(self, field_id: str) -> Optional[Field]:
        """Get a field by id."""
        for f in self.fields:
            if f.id == field_id:
                return f
        return None


@dataclass(frozen=True)
class Relationship:
    """
    A relationship between two table fields.

    ``cascade`` overrides the configured cascade policy for one-to-many
    collection attributes of this relationship.
    """

    source_table_id: str
    source_field_id: str
    target_table_id: str
    target_field_id: str
    source_cardinality: Cardinality = Cardinality.ONE
    target_cardinality: Cardinality = Cardinality.MANY
    id: Optional[str] = None
    name: Optional[str] = None
    cascade: Optional[str] = None


@dataclass(frozen=True)
class CustomType:
    """A user-defined database type; only enums are rendered."""

    name: str
    kind: CustomTypeKind = CustomTypeKind.ENUM
    values: Sequence[str] = field(default_factory=tuple)
    schema: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class Diagram:
    """
    Root input of model generation.

    Tables and relationships are ordered; their order drives the order of the
    generated classes and association tables.
    """

    database_type: DatabaseType = DatabaseType.GENERIC
    tables: Sequence[Table] = field(default_factory=tuple)
    relationships: Sequence[Relationship] = field(default_factory=tuple)
    custom_types: Sequence[CustomType] = field(default_factory=tuple)
    name: Optional[str] = None
    id: Optional[str] = None

    def get_table(self, table_id: str) -> Optional[Table]:
        """Get a table by id."""
        for table in self.tables:
            if table.id == table_id:
                return table
        return None
