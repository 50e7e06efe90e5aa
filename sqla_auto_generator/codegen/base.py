"""
Shared building blocks for the SQLAlchemy source generators.

The renderers never concatenate source fragments ad hoc: calls, keyword
arguments, string literals and mapped attributes are produced by the helpers
below, and larger blocks come from the Jinja2 templates shipped with the
package.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from sqla_auto_generator.constants import GenerationOptions
from sqla_auto_generator.domain.models import Diagram
from sqla_auto_generator.domain.relationships import (
    AssociationTable, ClassifiedRelationship, ForeignKeyMap,
)
from sqla_auto_generator.domain.type_mapping import DialectSymbol, TypeMapper


# Define the path to the templates directory relative to this package
TEMPLATE_DIR = Path(__file__).parent.parent / GenerationOptions.TEMPLATE_DIR

INDENT = GenerationOptions.DEFAULT_INDENT

_LINE_BREAK = re.compile(r"\r?\n")

Keyword = Tuple[str, str]


@dataclass(frozen=True)
class RenderResult:
    """Rendered text of one unit plus the dialect symbols it uses."""

    text: str
    symbols: FrozenSet[DialectSymbol] = field(default_factory=frozenset)


@dataclass
class GenerationContext:
    """
    Context information for one generation run.

    Everything here is derived from the diagram when the run starts and
    discarded with it.
    """

    diagram: Diagram
    type_mapper: TypeMapper
    relationships: List[ClassifiedRelationship]
    foreign_keys: ForeignKeyMap
    associations: List[AssociationTable]
    associations_by_pair: Dict[Tuple[str, str], AssociationTable]
    cascade: str
    jinja_env: Environment

    def association_for(self, rel: ClassifiedRelationship) -> Optional[AssociationTable]:
        """First association table joining the same table pair as ``rel``."""
        return self.associations_by_pair.get((rel.a.table.id, rel.b.table.id))


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment for model templates."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,  # Generated Python source, not markup
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )
    return env


def render_template(env: Environment, template_name: str, **context) -> str:
    """Render a template and drop the trailing newlines of the last line."""
    return env.get_template(template_name).render(**context).rstrip("\n")


def create_string_literal(value: str) -> str:
    """Double-quoted string literal; the value is emitted as is."""
    return f'"{value}"'


def create_keyword(name: str, value: str) -> Keyword:
    """A keyword argument whose value is a source expression."""
    return (name, value)


def create_call(func_name: str, args: Sequence[str] = (), keywords: Sequence[Keyword] = ()) -> str:
    """Render ``func(arg, ..., name=value, ...)``."""
    parts = list(args) + [f"{name}={value}" for name, value in keywords]
    return f"{func_name}({', '.join(parts)})"


def create_mapped_attribute(name: str, annotation: str, value: str) -> str:
    """Render an indented ``name: Mapped[annotation] = value`` class attribute."""
    return f"{INDENT}{name}: Mapped[{annotation}] = {value}"


def create_comment_lines(comment: Optional[str], indent: str = INDENT) -> List[str]:
    """
    Turn a free-text comment into ``# `` prefixed source lines.

    Line breaks are normalized and the comment is trimmed as a whole; each
    remaining line becomes one comment line.
    """
    if not comment:
        return []
    sanitized = _LINE_BREAK.sub("\n", comment).strip()
    if not sanitized:
        return []
    return [f"{indent}# {line}" for line in sanitized.split("\n")]


def create_docstring_text(comment: Optional[str]) -> Optional[str]:
    """Single-line docstring body: newlines flattened, triple quotes escaped."""
    if not comment:
        return None
    return _LINE_BREAK.sub(" ", comment).replace('"""', '\\"""')
