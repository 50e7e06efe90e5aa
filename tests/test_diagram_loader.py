"""
Tests for loading diagram documents exported by the diagram editor.
"""

import json
import tempfile
from pathlib import Path
from unittest import TestCase

import pytest

from sqla_auto_generator.diagram_loader import load_diagram, parse_diagram
from sqla_auto_generator.domain.models import Cardinality, CustomTypeKind, DatabaseType
from sqla_auto_generator.exceptions import DiagramLoadError

from factories import EDITOR_DOCUMENT


class TestParseDiagram(TestCase):

    def test_editor_document(self):
        diagram = parse_diagram(EDITOR_DOCUMENT)

        assert diagram.database_type == DatabaseType.POSTGRESQL
        assert diagram.name == "Library"
        assert [t.name for t in diagram.tables] == ["authors", "books"]

        authors = diagram.tables[0]
        assert authors.schema == "public"
        assert authors.comments == "People who write"
        assert authors.fields[0].primary_key is True
        assert authors.fields[0].increment is True
        assert authors.fields[1].character_maximum_length == "120"
        assert authors.fields[1].comments == "Pen name"
        assert authors.indexes[0].field_ids == ("aname",)
        assert authors.indexes[0].unique is True

    def test_defaults_for_omitted_keys(self):
        books = parse_diagram(EDITOR_DOCUMENT).tables[1]

        assert books.schema is None
        assert books.is_view is False
        assert books.fields[1].nullable is True
        assert books.fields[1].unique is False
        assert books.fields[2].default == "'draft'"

    def test_relationships_and_custom_types(self):
        diagram = parse_diagram(EDITOR_DOCUMENT)

        (rel,) = diagram.relationships
        assert rel.source_table_id == "a"
        assert rel.target_field_id == "baid"
        assert rel.source_cardinality == Cardinality.ONE
        assert rel.target_cardinality == Cardinality.MANY

        (custom_type,) = diagram.custom_types
        assert custom_type.kind == CustomTypeKind.ENUM
        assert custom_type.values == ("draft", "published")
        assert custom_type.schema == "public"

    def test_minimal_document(self):
        diagram = parse_diagram({})
        assert diagram.database_type == DatabaseType.GENERIC
        assert diagram.tables == ()

    def test_invalid_cardinality(self):
        document = dict(EDITOR_DOCUMENT)
        document["relationships"] = [dict(EDITOR_DOCUMENT["relationships"][0], sourceCardinality="several")]

        with pytest.raises(DiagramLoadError) as exc_info:
            parse_diagram(document)
        assert "sourceCardinality" in str(exc_info.value)

    def test_missing_required_key(self):
        with pytest.raises(DiagramLoadError):
            parse_diagram({"tables": [{"id": "t", "fields": []}]})

    def test_non_mapping_document(self):
        with pytest.raises(DiagramLoadError):
            parse_diagram(["not", "a", "diagram"])


class TestLoadDiagram(TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_json_file(self):
        path = self.tmp_dir / "library.json"
        path.write_text(json.dumps(EDITOR_DOCUMENT), encoding="utf-8")

        assert len(load_diagram(path).tables) == 2

    def test_yaml_file(self):
        path = self.tmp_dir / "library.yml"
        path.write_text(
            "databaseType: mysql\n"
            "tables:\n"
            "  - id: t1\n"
            "    name: users\n"
            "    fields:\n"
            "      - id: f1\n"
            "        name: id\n"
            "        type: {name: integer}\n"
            "        primaryKey: true\n",
            encoding="utf-8",
        )
        diagram = load_diagram(str(path))

        assert diagram.database_type == DatabaseType.MYSQL
        assert diagram.tables[0].fields[0].primary_key is True

    def test_missing_file(self):
        with pytest.raises(DiagramLoadError) as exc_info:
            load_diagram(self.tmp_dir / "absent.json")
        assert exc_info.value.error_code == "DIAGRAM_LOAD_ERROR"

    def test_malformed_json(self):
        path = self.tmp_dir / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(DiagramLoadError):
            load_diagram(path)
