"""
Type mapping domain logic for SQLA Auto Generator.

Two independent resolvers live here:

- storage types: the SQLAlchemy type expression of a column, chosen per
  dialect. Dialect-specific expressions also report the symbol they need
  imported, as part of the returned ``StorageType``.
- value annotations: the Python type used in ``Mapped[...]``. These depend
  only on the declared type name, never on the dialect.

Unrecognized declared types fall back to a plain string in both resolvers.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from sqla_auto_generator.constants import (
    DialectFamily, TypeNames, POSTGRES_LIKE, MYSQL_LIKE, MSSQL_LIKE,
    POSTGRES_TYPES, MYSQL_TYPES, MSSQL_TYPES, MSSQL_UNICODE_TYPES,
)
from sqla_auto_generator.domain.models import (
    CustomType, CustomTypeKind, DatabaseType, Field,
)


logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\s*(\d+)")

FALLBACK_STORAGE_TYPE = "sa.String"
FALLBACK_ANNOTATION = "str"


@dataclass(frozen=True)
class DialectSymbol:
    """A name to import from ``sqlalchemy.dialects.<family>``."""

    family: str
    name: str


@dataclass(frozen=True)
class StorageType:
    """Resolved SQLAlchemy type expression plus the dialect symbols it uses."""

    expression: str
    symbols: FrozenSet[DialectSymbol] = field(default_factory=frozenset)

    @classmethod
    def dialect(cls, family: str, name: str) -> "StorageType":
        """A bare dialect type such as ``JSONB``."""
        return cls(name, frozenset({DialectSymbol(family, name)}))


@dataclass(frozen=True)
class EnumTypeInfo:
    """Literal values and optional schema of a custom enum type."""

    values: Tuple[str, ...]
    schema: Optional[str] = None


def build_enum_type_map(custom_types: Iterable[CustomType]) -> Dict[str, EnumTypeInfo]:
    """Index enum custom types with at least one value by declared name."""
    enum_types: Dict[str, EnumTypeInfo] = {}
    for custom_type in custom_types:
        if custom_type.kind != CustomTypeKind.ENUM or not custom_type.values:
            continue
        enum_types[custom_type.name] = EnumTypeInfo(
            values=tuple(custom_type.values),
            schema=custom_type.schema or None,
        )
    return enum_types


def array_element_type(declared_name: str) -> Optional[str]:
    """
    Element type name of an array-marked declared type, else None.

    ``varchar[]`` gives ``varchar``; the generic ``array`` marker gives ``text``.
    """
    if declared_name.endswith(TypeNames.ARRAY_SUFFIX):
        return declared_name[:-len(TypeNames.ARRAY_SUFFIX)]
    if declared_name.lower() == TypeNames.ARRAY:
        return TypeNames.TEXT
    return None


def parse_max_length(value: Union[int, str, None]) -> Optional[int]:
    """Positive integer prefix of a declared max length, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    match = _LEADING_DIGITS.match(str(value))
    if not match:
        return None
    size = int(match.group(1))
    return size if size > 0 else None


def resolve_annotation(declared_name: str) -> str:
    """
    Python annotation for a declared type name, independent of dialect.

    Array markers are resolved one level deep into ``list[...]``.
    """
    element = array_element_type(declared_name)
    if element is not None:
        return f"list[{_scalar_annotation(element.lower())}]"
    return _scalar_annotation(declared_name.lower())


def _scalar_annotation(t: str) -> str:
    if t in TypeNames.INTEGER or t in TypeNames.BIG_INTEGER or t in TypeNames.SMALL_INTEGER:
        return "int"
    if t in TypeNames.NUMERIC:
        return "Decimal"
    if t in TypeNames.FLOAT:
        return "float"
    if TypeNames.VARCHAR_MARKER in t or t in TypeNames.STRING or t == TypeNames.TEXT:
        return "str"
    if t == TypeNames.DATE:
        return "datetime.date"
    if TypeNames.TIMESTAMP_MARKER in t or t in TypeNames.EXTENDED_DATETIME:
        return "datetime.datetime"
    if t == TypeNames.TIME:
        return "datetime.time"
    if t in TypeNames.BOOLEAN or t.startswith(TypeNames.TINYINT_PREFIX):
        return "bool"
    if t in TypeNames.BINARY:
        return "bytes"
    if t == TypeNames.UUID:
        return "str"
    if t in TypeNames.JSON:
        return "dict[str, Any]"
    return FALLBACK_ANNOTATION


class TypeMapper:
    """
    Resolves storage types and annotations for the fields of one diagram.

    A mapper is bound to a database type and the diagram's enum types; it is
    created per generation run and keeps no state between calls.
    """

    def __init__(
        self,
        database_type: Union[DatabaseType, str] = DatabaseType.GENERIC,
        enum_types: Optional[Mapping[str, EnumTypeInfo]] = None,
    ):
        self.database_type = DatabaseType(database_type)
        self.enum_types: Mapping[str, EnumTypeInfo] = dict(enum_types or {})

    @property
    def is_postgres(self) -> bool:
        return self.database_type.value in POSTGRES_LIKE

    @property
    def is_mysql(self) -> bool:
        return self.database_type.value in MYSQL_LIKE

    @property
    def is_mssql(self) -> bool:
        return self.database_type.value in MSSQL_LIKE

    def resolve_storage_type(self, field: Field) -> StorageType:
        """
        Resolve the SQLAlchemy type expression of a field.

        Args:
            field: Field to resolve

        Returns:
            The type expression and the dialect symbols it requires
        """
        declared = field.type.name
        if declared in self.enum_types:
            return self._enum_type(declared)

        element = array_element_type(declared)
        if element is not None:
            element_type = self._resolve_element(element, field)
            return StorageType(f"sa.ARRAY({element_type.expression})", element_type.symbols)

        return self._resolve_scalar(declared.lower(), field)

    def resolve_annotation(self, field: Field) -> str:
        """Resolve the ``Mapped[...]`` annotation of a field."""
        if field.type.name in self.enum_types:
            return FALLBACK_ANNOTATION
        return resolve_annotation(field.type.name)

    def _resolve_element(self, element: str, field: Field) -> StorageType:
        # Arrays nest one level only; an inner marker is an unknown scalar
        if element in self.enum_types:
            return self._enum_type(element)
        return self._resolve_scalar(element.lower(), field)

    def _enum_type(self, name: str) -> StorageType:
        info = self.enum_types[name]
        values = ", ".join(json.dumps(value, ensure_ascii=False) for value in info.values)
        schema_arg = f', schema="{info.schema}"' if info.schema else ""
        return StorageType(f'sa.Enum({values}, name="{name}"{schema_arg})')

    def _resolve_scalar(self, t: str, field: Field) -> StorageType:
        resolved = self._resolve_dialect_override(t, field)
        if resolved is None:
            resolved = self._resolve_generic(t, field)
        if resolved is None:
            logger.debug(f"No storage type mapping for '{field.type.name}' on field '{field.name}', using {FALLBACK_STORAGE_TYPE}")
            resolved = StorageType(FALLBACK_STORAGE_TYPE)
        return resolved

    def _resolve_dialect_override(self, t: str, field: Field) -> Optional[StorageType]:
        if t == TypeNames.UUID:
            if self.is_postgres:
                return StorageType.dialect(DialectFamily.POSTGRES, "UUID")
            if self.is_mssql:
                return StorageType.dialect(DialectFamily.MSSQL, "UNIQUEIDENTIFIER")
            return StorageType("sa.String")

        if t in TypeNames.JSON:
            if self.is_postgres:
                return StorageType.dialect(DialectFamily.POSTGRES, "JSONB")
            if self.is_mysql:
                return StorageType.dialect(DialectFamily.MYSQL, "JSON")
            return StorageType("sa.JSON")

        if self.is_postgres:
            if t in POSTGRES_TYPES:
                return StorageType.dialect(DialectFamily.POSTGRES, POSTGRES_TYPES[t])
            if t == "interval":
                return StorageType("sa.Interval")

        if self.is_mysql:
            if t in MYSQL_TYPES:
                return StorageType.dialect(DialectFamily.MYSQL, MYSQL_TYPES[t])
            if t.startswith(TypeNames.TINYINT_PREFIX):
                return StorageType("sa.Boolean")

        if self.is_mssql:
            if t in MSSQL_TYPES:
                return StorageType.dialect(DialectFamily.MSSQL, MSSQL_TYPES[t])
            if t in MSSQL_UNICODE_TYPES:
                size = parse_max_length(field.character_maximum_length)
                return StorageType(f"sa.Unicode({size})" if size else "sa.UnicodeText")

        return None

    def _resolve_generic(self, t: str, field: Field) -> Optional[StorageType]:
        if t in TypeNames.INTEGER:
            return StorageType("sa.Integer")
        if t in TypeNames.BIG_INTEGER:
            return StorageType("sa.BigInteger")
        if t in TypeNames.SMALL_INTEGER or t.startswith(TypeNames.TINYINT_PREFIX):
            return StorageType("sa.SmallInteger")
        if t in TypeNames.NUMERIC:
            return StorageType(self._numeric_expression(field))
        if t in TypeNames.FLOAT:
            return StorageType("sa.Float")

        if TypeNames.VARCHAR_MARKER in t or t in TypeNames.STRING:
            size = parse_max_length(field.character_maximum_length)
            return StorageType(f"sa.String({size})" if size else "sa.String")
        if t == TypeNames.TEXT:
            return StorageType("sa.Text")

        if t == TypeNames.DATE:
            return StorageType("sa.Date")
        if TypeNames.TIMESTAMP_MARKER in t:
            return StorageType("sa.DateTime(timezone=True)")
        if t == TypeNames.DATETIME:
            return StorageType("sa.DateTime")
        if t == TypeNames.TIME:
            return StorageType("sa.Time")

        if t in TypeNames.BOOLEAN:
            return StorageType("sa.Boolean")
        if t in TypeNames.BINARY:
            return StorageType("sa.LargeBinary")
        return None

    @staticmethod
    def _numeric_expression(field: Field) -> str:
        if not field.precision:
            return "sa.Numeric"
        if field.scale:
            return f"sa.Numeric(precision={field.precision}, scale={field.scale})"
        return f"sa.Numeric(precision={field.precision})"
