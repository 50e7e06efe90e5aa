"""
Tests for the colored console formatter.
"""

import logging
from unittest import TestCase
from unittest.mock import MagicMock

from sqla_auto_generator.colored_logging import (
    ColoredFormatter,
    SECTION_RULE,
    log_progress,
    log_section,
    log_success,
)


def make_record(level, message):
    return logging.LogRecord("sqla", level, __file__, 1, message, None, None)


class TestColoredFormatter(TestCase):

    def formatter(self):
        formatter = ColoredFormatter()
        formatter.use_colors = True
        return formatter

    def test_plain_when_colors_disabled(self):
        formatter = ColoredFormatter(use_colors=False)
        assert formatter.format(make_record(logging.ERROR, "boom")) == "ERROR: boom"

    def test_errors_are_red(self):
        text = self.formatter().format(make_record(logging.ERROR, "boom"))
        assert text == "\033[31mERROR: boom\033[0m"

    def test_success_mark_is_bright_green(self):
        text = self.formatter().format(make_record(logging.INFO, "✓ done"))
        assert text.startswith("\033[92m\033[1m")

    def test_progress_mark_is_bright_blue(self):
        text = self.formatter().format(make_record(logging.INFO, "→ loading"))
        assert text.startswith("\033[94m")

    def test_plain_info_is_uncolored(self):
        assert self.formatter().format(make_record(logging.INFO, "hello")) == "INFO: hello"

    def test_debug_is_cyan(self):
        assert self.formatter().format(make_record(logging.DEBUG, "detail")).startswith("\033[36m")


class TestLogHelpers(TestCase):

    def test_marks(self):
        logger = MagicMock()
        log_success(logger, "done")
        log_progress(logger, "working")
        assert [c.args[0] for c in logger.info.call_args_list] == ["✓ done", "→ working"]

    def test_section(self):
        logger = MagicMock()
        log_section(logger, "models")
        assert [c.args[0] for c in logger.info.call_args_list] == [SECTION_RULE, "  MODELS", SECTION_RULE]
