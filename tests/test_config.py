"""
Tests for generator options and the tool configuration loader.
"""

import tempfile
from argparse import Namespace
from pathlib import Path
from unittest import TestCase

import pytest
from pydantic import ValidationError

from sqla_auto_generator.config import GeneratorOptions, ToolConfigSchema, load_config
from sqla_auto_generator.exceptions import ConfigurationError


def cli_args(**values):
    defaults = dict(input_file=None, output_file=None, cascade=None, format_code=None,
                    config=None, verbose=False, no_color=False)
    defaults.update(values)
    return Namespace(**defaults)


class TestGeneratorOptions(TestCase):

    def test_default_cascade(self):
        assert GeneratorOptions().cascade == "all, delete-orphan"

    def test_blank_cascade_is_rejected(self):
        with pytest.raises(ValidationError):
            GeneratorOptions(cascade="  ")

    def test_unknown_options_are_rejected(self):
        with pytest.raises(ValidationError):
            GeneratorOptions(lazy="joined")


class TestToolConfigSchema(TestCase):

    def test_generator_options_default(self):
        assert ToolConfigSchema().generator_options() == GeneratorOptions()

    def test_generator_options_with_cascade(self):
        config = ToolConfigSchema(cascade=" save-update ")
        assert config.generator_options().cascade == "save-update"


class TestLoadConfig(TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write_config(self, text):
        path = self.tmp_dir / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_no_config_file(self):
        config = load_config(None, cli_args(input_file="diagram.json"))
        assert config.input_file == "diagram.json"
        assert config.output_file is None
        assert config.format_code is False

    def test_yaml_values(self):
        path = self.write_config(
            "input_file: schema.json\n"
            "output_file: models.py\n"
            "format_code: true\n"
            "cascade: all\n"
            "unrelated_key: ignored\n"
        )
        config = load_config(path, cli_args())

        assert config.input_file == "schema.json"
        assert config.output_file == "models.py"
        assert config.format_code is True
        assert config.cascade == "all"

    def test_cli_arguments_override_file(self):
        path = self.write_config("output_file: models.py\ncascade: all\n")
        config = load_config(path, cli_args(output_file="out.py", cascade=None))

        assert config.output_file == "out.py"
        assert config.cascade == "all"

    def test_missing_config_file_uses_cli_arguments(self):
        config = load_config(str(self.tmp_dir / "absent.yaml"), cli_args(input_file="d.json"))
        assert config.input_file == "d.json"

    def test_empty_config_file(self):
        assert load_config(self.write_config(""), cli_args()).input_file is None

    def test_invalid_yaml_raises_configuration_error(self):
        path = self.write_config("input_file: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(path, cli_args())

    def test_non_mapping_raises_configuration_error(self):
        path = self.write_config("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(path, cli_args())

    def test_invalid_values_raise_configuration_error(self):
        path = self.write_config("format_code: maybe\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, cli_args())
        assert "format_code" in str(exc_info.value)
        assert exc_info.value.error_code == "CONFIG_ERROR"
