"""
Centralized constants for SQLA Auto Generator.

This module contains dialect families, default schemas, declared type
synonyms and the fixed pieces of generated source text. Keeping them here
makes it easy for contributors to extend the type vocabulary.
"""

from typing import Dict, FrozenSet, List


# =============================================================================
# DIALECTS
# =============================================================================

class DialectFamily:
    """Families of dialect-specific SQLAlchemy type modules."""

    POSTGRES = "postgresql"
    MYSQL = "mysql"
    MSSQL = "mssql"

    # Order in which dialect import lines are emitted
    IMPORT_ORDER: List[str] = [POSTGRES, MYSQL, MSSQL]


# Default schema per database type (values of DatabaseType)
DEFAULT_SCHEMAS: Dict[str, str] = {
    "postgresql": "public",
    "cockroachdb": "public",
    "sql_server": "dbo",
    "clickhouse": "default",
}

# Database types sharing a dialect type vocabulary
POSTGRES_LIKE: FrozenSet[str] = frozenset({"postgresql", "cockroachdb"})
MYSQL_LIKE: FrozenSet[str] = frozenset({"mysql", "mariadb"})
MSSQL_LIKE: FrozenSet[str] = frozenset({"sql_server"})


# =============================================================================
# DECLARED TYPE SYNONYMS (lower-cased)
# =============================================================================

class TypeNames:
    """Declared type names recognized by the type mapper."""

    ARRAY_SUFFIX = "[]"
    ARRAY = "array"

    INTEGER: FrozenSet[str] = frozenset({"integer", "int", "int4", "serial", "mediumint"})
    BIG_INTEGER: FrozenSet[str] = frozenset({"bigint", "int8", "bigserial"})
    SMALL_INTEGER: FrozenSet[str] = frozenset({"smallint", "int2", "smallserial"})
    NUMERIC: FrozenSet[str] = frozenset({"decimal", "numeric"})
    FLOAT: FrozenSet[str] = frozenset({
        "double", "double precision", "float8", "real", "float", "float4",
    })

    VARCHAR_MARKER = "varchar"
    STRING: FrozenSet[str] = frozenset({"character varying", "char", "character"})
    TEXT = "text"

    DATE = "date"
    TIMESTAMP_MARKER = "timestamp"
    DATETIME = "datetime"
    TIME = "time"

    BOOLEAN: FrozenSet[str] = frozenset({"boolean", "bool"})
    TINYINT_PREFIX = "tinyint"

    BINARY: FrozenSet[str] = frozenset({"bytea", "blob", "binary", "varbinary"})

    UUID = "uuid"
    JSON: FrozenSet[str] = frozenset({"json", "jsonb"})

    # SQL Server extended datetime names that annotate as datetime.datetime
    EXTENDED_DATETIME: FrozenSet[str] = frozenset({"datetime2", "smalldatetime", "datetime"})


# Postgres-only declared names mapped to sqlalchemy.dialects.postgresql symbols
POSTGRES_TYPES: Dict[str, str] = {
    "inet": "INET",
    "cidr": "CIDR",
    "macaddr": "MACADDR",
    "citext": "CITEXT",
    "hstore": "HSTORE",
    "money": "MONEY",
}

# MySQL-only declared names mapped to sqlalchemy.dialects.mysql symbols
MYSQL_TYPES: Dict[str, str] = {
    "mediumtext": "MEDIUMTEXT",
    "longtext": "LONGTEXT",
    "year": "YEAR",
    "set": "SET",
}

# SQL-Server-only declared names mapped to sqlalchemy.dialects.mssql symbols
MSSQL_TYPES: Dict[str, str] = {
    "datetime2": "DATETIME2",
    "smalldatetime": "SMALLDATETIME",
    "money": "MONEY",
    "uniqueidentifier": "UNIQUEIDENTIFIER",
}

MSSQL_UNICODE_TYPES: FrozenSet[str] = frozenset({"nvarchar", "nchar", "ntext"})


# =============================================================================
# GENERATED SOURCE
# =============================================================================

class GenerationOptions:
    """Code generation constants."""

    DEFAULT_INDENT = "    "  # 4 spaces

    TEMPLATE_DIR = "templates"
    CLASS_TEMPLATE = "model_class.py.j2"
    ASSOCIATION_TEMPLATE = "association_table.py.j2"

    ASSOCIATION_PREFIX = "assoc"


class RelationshipDefaults:
    """Default values for relationship attributes."""

    LAZY = "selectin"
    CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"

    DEFAULT_CASCADE = CASCADE_ALL_DELETE_ORPHAN


PROLOGUE_IMPORTS: List[str] = [
    "from __future__ import annotations",
    "import datetime",
    "import uuid",
    "from decimal import Decimal",
    "from typing import Any",
    "import sqlalchemy as sa",
    "from sqlalchemy import Table",
    "from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column",
]

BASE_CLASS_BLOCK = "class Base(DeclarativeBase):\n    pass\n"
