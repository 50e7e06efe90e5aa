"""
Tests for the sqla-auto-generator command line tool.
"""

import json
import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import pytest

from sqla_auto_generator.cli import build_parser, main
from sqla_auto_generator.config import GeneratorOptions

from factories import EDITOR_DOCUMENT


class TestBuildParser(TestCase):

    def test_defaults_leave_config_values_alone(self):
        args = build_parser().parse_args([])
        assert args.input_file is None
        assert args.output_file is None
        assert args.cascade is None
        assert args.format_code is None

    def test_all_options(self):
        args = build_parser().parse_args(
            ["d.json", "-c", "conf.yaml", "-o", "models.py", "--cascade", "all", "--format", "-v", "--no-color"]
        )
        assert args.input_file == "d.json"
        assert args.config == "conf.yaml"
        assert args.output_file == "models.py"
        assert args.cascade == "all"
        assert args.format_code is True
        assert args.verbose is True
        assert args.no_color is True


class TestMain(TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)
        self.diagram_path = self.tmp_dir / "library.json"
        self.diagram_path.write_text(json.dumps(EDITOR_DOCUMENT), encoding="utf-8")

        patcher = patch("sqla_auto_generator.cli.setup_colored_logging")
        self.mock_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def test_writes_models_to_output_file(self):
        output = self.tmp_dir / "out" / "models.py"
        main([str(self.diagram_path), "-o", str(output), "--no-color"])

        code = output.read_text(encoding="utf-8")
        assert "class Authors(Base):" in code
        assert 'sa.ForeignKey("public.authors.author_id")' in code
        assert 'sa.Enum("draft", "published", name="book_status", schema="public")' in code
        self.mock_logging.assert_called_once()

    def test_writes_models_to_stdout(self):
        with patch("sqla_auto_generator.cli.sys.stdout") as mock_stdout:
            main([str(self.diagram_path)])

        written = "".join(call.args[0] for call in mock_stdout.write.call_args_list)
        assert "class Books(Base):" in written

    def test_cascade_option_is_passed_to_generator(self):
        with patch("sqla_auto_generator.cli.generate_models_code", return_value="code\n") as mock_generate, \
                patch("sqla_auto_generator.cli.sys.stdout"):
            main([str(self.diagram_path), "--cascade", "all"])

        _, options = mock_generate.call_args.args
        assert options == GeneratorOptions(cascade="all")

    def test_format_option_runs_black(self):
        output = self.tmp_dir / "models.py"
        with patch("sqla_auto_generator.cli.format_python_code_using_black", return_value="formatted\n") as mock_black:
            main([str(self.diagram_path), "-o", str(output), "--format"])

        mock_black.assert_called_once()
        assert output.read_text(encoding="utf-8") == "formatted\n"

    def test_code_is_not_formatted_by_default(self):
        output = self.tmp_dir / "models.py"
        with patch("sqla_auto_generator.cli.format_python_code_using_black") as mock_black:
            main([str(self.diagram_path), "-o", str(output)])

        mock_black.assert_not_called()

    def test_empty_diagram_writes_nothing(self):
        empty = self.tmp_dir / "empty.json"
        empty.write_text("{}", encoding="utf-8")
        output = self.tmp_dir / "models.py"

        main([str(empty), "-o", str(output)])
        assert not output.exists()

    def test_missing_diagram_exits_with_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main([str(self.tmp_dir / "absent.json")])
        assert exc_info.value.code == 1

    def test_no_diagram_given_exits_with_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_dangling_relationship_exits_with_error(self):
        document = dict(EDITOR_DOCUMENT)
        document["relationships"] = [dict(EDITOR_DOCUMENT["relationships"][0], targetTableId="gone")]
        self.diagram_path.write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main([str(self.diagram_path)])
        assert exc_info.value.code == 1
