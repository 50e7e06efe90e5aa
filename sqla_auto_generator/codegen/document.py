"""
Document orchestration: turns a diagram into one SQLAlchemy models module.

Generation runs in two stages. Every association table and model class is
rendered first, each as a ``RenderResult`` carrying its text and the dialect
symbols it needs. The module is then assembled: prologue imports plus the
aggregated dialect imports, the base class, association tables, then classes.
"""

import logging
from typing import List, Optional, Set

from sqla_auto_generator.codegen.base import GenerationContext, RenderResult, setup_jinja_env
from sqla_auto_generator.codegen.imports import build_import_block
from sqla_auto_generator.codegen.tables import render_association_table, render_class
from sqla_auto_generator.config import GeneratorOptions
from sqla_auto_generator.constants import BASE_CLASS_BLOCK
from sqla_auto_generator.domain.models import Diagram
from sqla_auto_generator.domain.relationships import (
    RelationshipClassifier, build_association_tables, index_associations_by_pair, resolve_foreign_keys,
)
from sqla_auto_generator.domain.type_mapping import DialectSymbol, TypeMapper, build_enum_type_map


logger = logging.getLogger(__name__)


def build_generation_context(diagram: Diagram, options: Optional[GeneratorOptions] = None) -> GenerationContext:
    """
    Derive everything one generation run needs from the diagram.

    Raises:
        DiagramReferenceError: If a relationship names an unknown table or field
    """
    options = options or GeneratorOptions()
    relationships = RelationshipClassifier(diagram).classify_all()
    associations = build_association_tables(relationships, diagram.database_type)
    return GenerationContext(
        diagram=diagram,
        type_mapper=TypeMapper(diagram.database_type, build_enum_type_map(diagram.custom_types)),
        relationships=relationships,
        foreign_keys=resolve_foreign_keys(relationships),
        associations=associations,
        associations_by_pair=index_associations_by_pair(associations),
        cascade=options.cascade,
        jinja_env=setup_jinja_env(),
    )


def _assemble(associations: List[RenderResult], classes: List[RenderResult]) -> str:
    symbols: Set[DialectSymbol] = set()
    for result in associations + classes:
        symbols.update(result.symbols)

    header = f"{build_import_block(symbols)}\n\n\n{BASE_CLASS_BLOCK}"
    association_text = "\n".join(f"{result.text}\n" for result in associations)
    class_text = "\n\n".join(result.text for result in classes)
    return "\n".join(part for part in (header, association_text, class_text, "\n") if part)


def generate_models_code(diagram: Diagram, options: Optional[GeneratorOptions] = None) -> str:
    """
    Generate the SQLAlchemy declarative models module for a diagram.

    Args:
        diagram: The diagram to render; never mutated
        options: Generator options, defaults when omitted

    Returns:
        Source text of the models module, or an empty string when the
        diagram has no tables

    Raises:
        DiagramReferenceError: If a relationship names an unknown table or field
    """
    if not diagram.tables:
        logger.debug("Diagram has no tables, nothing to generate")
        return ""

    context = build_generation_context(diagram, options)

    associations = [
        render_association_table(association, context.jinja_env)
        for association in context.associations
    ]
    classes = [
        render_class(table, context)
        for table in diagram.tables
        if not table.is_view
    ]
    logger.debug(f"Rendered {len(classes)} classes and {len(associations)} association tables")

    return _assemble(associations, classes)
