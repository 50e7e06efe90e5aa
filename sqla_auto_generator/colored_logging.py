"""
Colored logging formatter for SQLA Auto Generator.

Console output of the command line tool marks progress, success and
highlighted messages with a leading symbol; the formatter colors records by
those symbols and by level.
"""

import logging
import sys
from typing import Optional


SUCCESS_MARK = "✓"
PROGRESS_MARK = "→"
HIGHLIGHT_MARK = "•"
SECTION_RULE = "=" * 60


class ColoredFormatter(logging.Formatter):
    """
    Colored logging formatter that adds ANSI color codes to log messages.

    Errors and warnings are colored by level. INFO and DEBUG records are
    colored by their leading mark, and section rules are bold.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    MARK_COLORS = {
        SUCCESS_MARK: '\033[92m',    # Bright Green
        PROGRESS_MARK: '\033[94m',   # Bright Blue
        HIGHLIGHT_MARK: '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors; ignored when stderr is not a TTY
        """
        if fmt is None:
            fmt = "%(levelname)s: %(message)s"
        super().__init__(fmt)

        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        color = self._color_for(record)
        if not color:
            return formatted_message
        return f"{color}{formatted_message}{self.RESET}"

    def _color_for(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self.COLORS.get(record.levelname, '')

        message = record.getMessage().strip()
        if message == SECTION_RULE:
            return self.BOLD
        for mark, color in self.MARK_COLORS.items():
            if message.startswith(mark):
                bold = self.BOLD if mark == SUCCESS_MARK else ''
                return f"{color}{bold}"

        # Plain INFO stays uncolored
        if record.levelno == logging.DEBUG:
            return self.COLORS['DEBUG']
        return ''


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging for the application.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors)

    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message."""
    logger.info(f"{SUCCESS_MARK} {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message."""
    logger.info(f"{PROGRESS_MARK} {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message."""
    logger.info(f"{HIGHLIGHT_MARK} {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header between two rules."""
    logger.info(SECTION_RULE)
    logger.info(f"  {section_name.upper()}")
    logger.info(SECTION_RULE)
