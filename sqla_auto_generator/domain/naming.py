"""
Naming convention utilities for SQLA Auto Generator.

This module converts diagram table and field names into the identifiers
used by the generated SQLAlchemy code: class names, attribute names,
association-table names and collection attribute names.
"""

import re


_SEPARATOR_RUN = re.compile(r"[_\-\s]+(.)?")
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_ES_SUFFIX = re.compile(r"(s|x|z|ch|sh)$")
_CONSONANT_Y_SUFFIX = re.compile(r"[^aeiou]y$")


def to_pascal_case(name: str) -> str:
    """
    Convert a table name to a PascalCase class name.

    Runs of underscores, hyphens and whitespace are removed and the character
    following each run is uppercased, as is the first character. The rest of
    the name keeps its case.

    Args:
        name: The table name to convert

    Returns:
        The PascalCase class name

    Example:
        >>> to_pascal_case("user_accounts")
        'UserAccounts'
        >>> to_pascal_case("order-line items")
        'OrderLineItems'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    converted = _SEPARATOR_RUN.sub(lambda m: m.group(1).upper() if m.group(1) else "", name)
    return converted[:1].upper() + converted[1:]


def sanitize_identifier(name: str) -> str:
    """
    Replace every character outside letters, digits and underscore with '_'.

    Example:
        >>> sanitize_identifier("first name")
        'first_name'
    """
    return _INVALID_IDENTIFIER_CHARS.sub("_", name)


def pluralize(name: str) -> str:
    """
    Pluralize an English table name with a small rule set.

    Names already ending in 's' are treated as plural and returned unchanged.

    Example:
        >>> pluralize("box")
        'boxes'
        >>> pluralize("summary")
        'summaries'
        >>> pluralize("books")
        'books'
    """
    lower = name.lower()
    if lower.endswith("s"):
        return name
    if _ES_SUFFIX.search(lower):
        return f"{name}es"
    if _CONSONANT_Y_SUFFIX.search(lower):
        return f"{name[:-1]}ies"
    return f"{name}s"


def relationship_attribute_name(table_name: str) -> str:
    """Collection attribute name pointing at rows of ``table_name``."""
    return sanitize_identifier(pluralize(table_name))


def scalar_attribute_name(table_name: str) -> str:
    """Scalar attribute name pointing at one row of ``table_name``."""
    return sanitize_identifier(table_name)


def association_table_name(left_table: str, right_table: str, ordinal: int, prefix: str = "assoc") -> str:
    """Name of the join table synthesized for the relationship at ``ordinal``."""
    return sanitize_identifier(f"{prefix}_{left_table}_{right_table}_{ordinal}")
