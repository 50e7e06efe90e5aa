"""
Builders for diagram fixtures used across the test modules.

Every builder fills the same defaults the diagram editor uses for a freshly
created object, so tests only spell out what they are about.
"""

import itertools

from sqla_auto_generator.domain.models import (
    CustomType, DatabaseType, Diagram, Field, FieldType, Index, Relationship, Table,
)


_ids = itertools.count(1)


def next_id() -> str:
    return f"test-{next(_ids)}"


def mk_field(name="field", type_name="text", **overrides) -> Field:
    values = dict(id=next_id(), name=name, type=FieldType(name=type_name, id=type_name))
    values.update(overrides)
    return Field(**values)


def mk_table(name="table", fields=(), indexes=(), **overrides) -> Table:
    values = dict(id=next_id(), name=name, schema="public", fields=tuple(fields), indexes=tuple(indexes))
    values.update(overrides)
    return Table(**values)


def mk_index(name, field_ids, unique=False, **overrides) -> Index:
    return Index(name=name, field_ids=tuple(field_ids), unique=unique, id=next_id(), **overrides)


def mk_rel(source, source_field, target, target_field, source_cardinality="one",
           target_cardinality="many", **overrides) -> Relationship:
    return Relationship(
        id=overrides.pop("id", next_id()),
        source_table_id=source.id,
        source_field_id=source_field.id,
        target_table_id=target.id,
        target_field_id=target_field.id,
        source_cardinality=source_cardinality,
        target_cardinality=target_cardinality,
        **overrides,
    )


def mk_enum(name, values, schema=None) -> CustomType:
    return CustomType(name=name, values=tuple(values), schema=schema, id=next_id())


def mk_diagram(tables=(), relationships=(), custom_types=(),
               database_type=DatabaseType.POSTGRESQL) -> Diagram:
    return Diagram(
        id=next_id(),
        name="diagram",
        database_type=database_type,
        tables=tuple(tables),
        relationships=tuple(relationships),
        custom_types=tuple(custom_types),
    )


def authors_and_books(source_cardinality="one", target_cardinality="many"):
    """Two tables with bigint keys and a relationship from authors to books."""
    author_id = mk_field("author_id", "bigint", primary_key=True, nullable=False)
    authors = mk_table("authors", fields=[author_id])
    book_id = mk_field("book_id", "bigint", primary_key=True, nullable=False)
    book_author_id = mk_field("author_id", "bigint", nullable=False)
    books = mk_table("books", fields=[book_id, book_author_id])

    target_field = book_author_id if target_cardinality == "many" and source_cardinality == "one" else book_id
    rel = mk_rel(authors, author_id, books, target_field, source_cardinality, target_cardinality)
    return authors, books, rel


# A diagram document as exported by the editor, geometry keys included
EDITOR_DOCUMENT = {
    "id": "d1",
    "name": "Library",
    "databaseType": "postgresql",
    "createdAt": 1700000000000,
    "tables": [
        {
            "id": "a",
            "name": "authors",
            "schema": "public",
            "x": 10,
            "y": 20,
            "color": "#ff0000",
            "isView": False,
            "comments": "People who write",
            "fields": [
                {
                    "id": "aid",
                    "name": "author_id",
                    "type": {"id": "bigint", "name": "bigint"},
                    "primaryKey": True,
                    "nullable": False,
                    "unique": False,
                    "increment": True,
                    "createdAt": 1700000000000,
                },
                {
                    "id": "aname",
                    "name": "name",
                    "type": {"id": "varchar", "name": "varchar"},
                    "primaryKey": False,
                    "nullable": False,
                    "unique": True,
                    "characterMaximumLength": "120",
                    "comments": "Pen name",
                },
            ],
            "indexes": [
                {"id": "i1", "name": "uq_name", "unique": True, "fieldIds": ["aname"], "isPrimaryKey": False},
            ],
        },
        {
            "id": "b",
            "name": "books",
            "fields": [
                {"id": "bid", "name": "book_id", "type": {"name": "bigint"}, "primaryKey": True, "nullable": False},
                {"id": "baid", "name": "author_id", "type": {"name": "bigint"}},
                {"id": "bstatus", "name": "status", "type": {"name": "book_status"}, "default": "'draft'"},
            ],
            "indexes": [],
        },
    ],
    "relationships": [
        {
            "id": "r1",
            "name": "authors_books",
            "sourceTableId": "a",
            "sourceFieldId": "aid",
            "targetTableId": "b",
            "targetFieldId": "baid",
            "sourceCardinality": "one",
            "targetCardinality": "many",
        },
    ],
    "customTypes": [
        {"id": "ct1", "name": "book_status", "kind": "enum", "values": ["draft", "published"], "schema": "public"},
    ],
}
