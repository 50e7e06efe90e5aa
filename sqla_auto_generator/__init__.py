"""
SQLA Auto Generator.

Renders relational database diagrams (tables, fields, relationships, indexes
and enum types) into SQLAlchemy 2.x declarative model source code.
"""

from sqla_auto_generator.codegen import generate_models_code
from sqla_auto_generator.config import GeneratorOptions
from sqla_auto_generator.diagram_loader import load_diagram, parse_diagram
from sqla_auto_generator.exceptions import DiagramReferenceError, SQLAAutoGeneratorError

__all__ = [
    'generate_models_code',
    'GeneratorOptions',
    'load_diagram',
    'parse_diagram',
    'DiagramReferenceError',
    'SQLAAutoGeneratorError',
]
