import logging

from black import FileMode, format_str as black_format_str, NothingChanged as BlackNothingChanged


logger = logging.getLogger(__name__)

BLACK_FORMATTER_MODE = FileMode(line_length=120)


def format_python_code_using_black(label: str, code_string: str) -> str:
    """
    Formats the given Python code using Black.

    ``label`` only names the code in log messages. On a Black failure the
    unformatted code is returned.
    """
    try:
        formatted_code = black_format_str(code_string, mode=BLACK_FORMATTER_MODE)
        logger.debug(f"Formatted code using Black: {label}")
        return formatted_code
    except BlackNothingChanged:
        logger.debug(f"Black formatter did not change the code: {label}")
        return code_string
    except Exception as e:
        logger.error(f"Could not format Python code using Black: {e}")
        logger.warning("Writing unformatted Python code due to Black error.")
        return code_string
