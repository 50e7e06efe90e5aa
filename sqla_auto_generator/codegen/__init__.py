"""
Code generation module for SQLA Auto Generator.

Renders diagrams into SQLAlchemy 2.x declarative model source code.
"""

from .base import GenerationContext, RenderResult, setup_jinja_env
from .columns import ColumnDescriptor, build_column, derive_server_default, render_column
from .tables import (
    ClassDescriptor,
    build_class,
    build_relationship_lines,
    build_table_args,
    render_association_table,
    render_class,
)
from .imports import build_import_block, dialect_import_lines
from .document import build_generation_context, generate_models_code

__all__ = [
    'GenerationContext',
    'RenderResult',
    'setup_jinja_env',

    # Columns
    'ColumnDescriptor',
    'build_column',
    'derive_server_default',
    'render_column',

    # Classes and association tables
    'ClassDescriptor',
    'build_class',
    'build_relationship_lines',
    'build_table_args',
    'render_association_table',
    'render_class',

    # Document
    'build_import_block',
    'dialect_import_lines',
    'build_generation_context',
    'generate_models_code',
]
