"""
Tests for table-level constraint planning.
"""

from unittest import TestCase

from sqla_auto_generator.domain.constraints import ConstraintAnalyzer, ConstraintType, TableConstraint

from factories import mk_field, mk_index, mk_table


class TestConstraintAnalyzer(TestCase):

    def setUp(self):
        self.analyzer = ConstraintAnalyzer()

    def test_single_primary_key_needs_no_constraint(self):
        table = mk_table("t", fields=[mk_field("id", "integer", primary_key=True)])
        assert self.analyzer.analyze_table_constraints(table) == []

    def test_composite_primary_key_in_declared_order(self):
        table = mk_table("enrollments", fields=[
            mk_field("student_id", "bigint", primary_key=True),
            mk_field("status", "varchar"),
            mk_field("offering_id", "bigint", primary_key=True),
        ])
        constraints = self.analyzer.analyze_table_constraints(table)

        assert constraints == [
            TableConstraint(ConstraintType.PRIMARY_KEY, ("student_id", "offering_id")),
        ]

    def test_index_duplicating_primary_key_is_dropped(self):
        pk = mk_field("id", "uuid", primary_key=True)
        table = mk_table("items", fields=[pk], indexes=[mk_index("idx_items_id", [pk.id])])
        assert self.analyzer.analyze_table_constraints(table) == []

    def test_composite_index_duplicating_composite_key_is_dropped(self):
        a = mk_field("a", "integer", primary_key=True)
        b = mk_field("b", "integer", primary_key=True)
        table = mk_table("t", fields=[a, b], indexes=[mk_index("idx_ba", [b.id, a.id], unique=True)])

        constraints = self.analyzer.analyze_table_constraints(table)
        assert [c.constraint_type for c in constraints] == [ConstraintType.PRIMARY_KEY]

    def test_unique_index_on_unique_column_is_dropped(self):
        code = mk_field("code", "varchar", unique=True)
        table = mk_table("items", fields=[mk_field("id", "uuid", primary_key=True), code],
                         indexes=[mk_index("uq_items_code", [code.id], unique=True)])
        assert self.analyzer.analyze_table_constraints(table) == []

    def test_unique_and_plain_indexes_survive(self):
        email = mk_field("email", "varchar")
        first = mk_field("first", "varchar")
        last = mk_field("last", "varchar")
        table = mk_table("people", fields=[mk_field("id", "integer", primary_key=True), email, first, last],
                         indexes=[
                             mk_index("uq_email", [email.id], unique=True),
                             mk_index("ix_name", [last.id, first.id]),
                         ])

        assert self.analyzer.analyze_table_constraints(table) == [
            TableConstraint(ConstraintType.UNIQUE, ("email",), "uq_email"),
            TableConstraint(ConstraintType.INDEX, ("last", "first"), "ix_name"),
        ]

    def test_primary_key_indexes_and_dangling_field_ids_are_ignored(self):
        pk = mk_field("id", "integer", primary_key=True)
        table = mk_table("t", fields=[pk], indexes=[
            mk_index("pk_t", [pk.id], unique=True, is_primary_key=True),
            mk_index("ix_gone", ["deleted-field"]),
            mk_index("ix_empty", []),
        ])
        assert self.analyzer.analyze_table_constraints(table) == []

    def test_table_without_primary_key_keeps_its_indexes(self):
        name = mk_field("name", "text")
        table = mk_table("log", fields=[name], indexes=[mk_index("ix_log_name", [name.id])])

        constraints = self.analyzer.analyze_table_constraints(table)
        assert constraints == [TableConstraint(ConstraintType.INDEX, ("name",), "ix_log_name")]
