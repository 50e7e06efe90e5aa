"""
Constraint analysis domain logic for SQLA Auto Generator.

This module decides which table-level constraints a model class declares in
its ``__table_args__``: the composite primary key and the named unique
constraints and indexes that survive deduplication.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from sqla_auto_generator.domain.models import Field, Index, Table


logger = logging.getLogger(__name__)


class ConstraintType(Enum):
    """Types of table-level constraints."""

    PRIMARY_KEY = "primary_key"
    UNIQUE = "unique"
    INDEX = "index"


@dataclass(frozen=True)
class TableConstraint:
    """A table-level constraint over field names in index order."""

    constraint_type: ConstraintType
    columns: Tuple[str, ...]
    name: str = ""


class ConstraintAnalyzer:
    """
    Plans the table-level constraints of one table.

    Deduplication rules:
    - an index over exactly the primary-key fields is dropped;
    - a single-column unique index on a column already flagged unique is dropped.
    """

    def analyze_table_constraints(self, table: Table) -> List[TableConstraint]:
        """
        Analyze constraints for a single table.

        Args:
            table: Table to analyze

        Returns:
            Composite primary key first, then surviving indexes in declared order
        """
        constraints: List[TableConstraint] = []

        primary_key = table.primary_key_fields
        if len(primary_key) > 1:
            constraints.append(TableConstraint(
                ConstraintType.PRIMARY_KEY, tuple(f.name for f in primary_key),
            ))

        pk_names = {f.name for f in primary_key}
        for index in table.indexes:
            if index.is_primary_key:
                continue
            constraint = self._analyze_index(table, index, pk_names)
            if constraint is not None:
                constraints.append(constraint)

        return constraints

    def _analyze_index(self, table: Table, index: Index, pk_names: set):
        fields = self._index_fields(table, index)
        if not fields:
            return None

        if {f.name for f in fields} == pk_names:
            logger.debug(f"Skipping index '{index.name}' on '{table.name}': duplicates the primary key")
            return None

        columns = tuple(f.name for f in fields)
        if index.unique:
            if len(fields) == 1 and fields[0].unique:
                logger.debug(f"Skipping unique index '{index.name}' on '{table.name}': column is already unique")
                return None
            return TableConstraint(ConstraintType.UNIQUE, columns, index.name)
        return TableConstraint(ConstraintType.INDEX, columns, index.name)

    @staticmethod
    def _index_fields(table: Table, index: Index) -> List[Field]:
        # Field ids that no longer exist in the table are ignored
        fields = []
        for field_id in index.field_ids:
            field = table.get_field(field_id)
            if field is not None:
                fields.append(field)
        return fields
