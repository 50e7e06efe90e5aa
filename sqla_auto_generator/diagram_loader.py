"""
Diagram loading for the command line tool.

Diagram files are the JSON (or YAML) documents exported by the diagram
editor. Their camelCase keys are validated with pydantic and converted to the
frozen domain models; editor-only keys such as table geometry and colors are
ignored.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from sqla_auto_generator.domain import models
from sqla_auto_generator.exceptions import DiagramLoadError


logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class DiagramSchemaModel(BaseModel):
    """Base for the diagram file schema: camelCase keys, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FieldTypeSchema(DiagramSchemaModel):
    name: str = Field(..., min_length=1)
    id: Optional[str] = None


class FieldSchema(DiagramSchemaModel):
    id: str
    name: str = Field(..., min_length=1)
    type: FieldTypeSchema
    primary_key: bool = False
    nullable: bool = True
    unique: bool = False
    increment: Optional[bool] = False
    default: Optional[str] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    character_maximum_length: Optional[Union[int, str]] = None
    comments: Optional[str] = None

    def to_domain(self) -> models.Field:
        return models.Field(
            id=self.id,
            name=self.name,
            type=models.FieldType(name=self.type.name, id=self.type.id),
            primary_key=self.primary_key,
            nullable=self.nullable,
            unique=self.unique,
            increment=bool(self.increment),
            default=self.default,
            precision=self.precision,
            scale=self.scale,
            character_maximum_length=self.character_maximum_length,
            comments=self.comments,
        )


class IndexSchema(DiagramSchemaModel):
    name: str
    field_ids: List[str] = Field(default_factory=list)
    unique: bool = False
    is_primary_key: Optional[bool] = False
    id: Optional[str] = None

    def to_domain(self) -> models.Index:
        return models.Index(
            name=self.name,
            field_ids=tuple(self.field_ids),
            unique=self.unique,
            is_primary_key=bool(self.is_primary_key),
            id=self.id,
        )


class TableSchema(DiagramSchemaModel):
    id: str
    name: str = Field(..., min_length=1)
    schema_name: Optional[str] = Field(default=None, alias="schema")
    is_view: Optional[bool] = False
    fields: List[FieldSchema] = Field(default_factory=list)
    indexes: List[IndexSchema] = Field(default_factory=list)
    comments: Optional[str] = None

    def to_domain(self) -> models.Table:
        return models.Table(
            id=self.id,
            name=self.name,
            schema=self.schema_name or None,
            is_view=bool(self.is_view),
            fields=tuple(f.to_domain() for f in self.fields),
            indexes=tuple(i.to_domain() for i in self.indexes),
            comments=self.comments,
        )


class RelationshipSchema(DiagramSchemaModel):
    source_table_id: str
    source_field_id: str
    target_table_id: str
    target_field_id: str
    source_cardinality: models.Cardinality = models.Cardinality.ONE
    target_cardinality: models.Cardinality = models.Cardinality.MANY
    id: Optional[str] = None
    name: Optional[str] = None
    cascade: Optional[str] = None

    def to_domain(self) -> models.Relationship:
        return models.Relationship(
            source_table_id=self.source_table_id,
            source_field_id=self.source_field_id,
            target_table_id=self.target_table_id,
            target_field_id=self.target_field_id,
            source_cardinality=self.source_cardinality,
            target_cardinality=self.target_cardinality,
            id=self.id,
            name=self.name,
            cascade=self.cascade or None,
        )


class CustomTypeSchema(DiagramSchemaModel):
    name: str
    kind: models.CustomTypeKind = models.CustomTypeKind.ENUM
    values: List[str] = Field(default_factory=list)
    schema_name: Optional[str] = Field(default=None, alias="schema")
    id: Optional[str] = None

    def to_domain(self) -> models.CustomType:
        return models.CustomType(
            name=self.name,
            kind=self.kind,
            values=tuple(self.values),
            schema=self.schema_name or None,
            id=self.id,
        )


class DiagramSchema(DiagramSchemaModel):
    """Top level of a diagram file."""

    database_type: models.DatabaseType = models.DatabaseType.GENERIC
    tables: List[TableSchema] = Field(default_factory=list)
    relationships: List[RelationshipSchema] = Field(default_factory=list)
    custom_types: List[CustomTypeSchema] = Field(default_factory=list)
    name: Optional[str] = None
    id: Optional[str] = None

    def to_domain(self) -> models.Diagram:
        return models.Diagram(
            database_type=self.database_type,
            tables=tuple(t.to_domain() for t in self.tables),
            relationships=tuple(r.to_domain() for r in self.relationships),
            custom_types=tuple(c.to_domain() for c in self.custom_types),
            name=self.name,
            id=self.id,
        )


def parse_diagram(data: Dict[str, Any], source: Optional[str] = None) -> models.Diagram:
    """
    Validate a raw diagram document and convert it to the domain model.

    Args:
        data: Decoded diagram document
        source: File the document came from, for error context

    Raises:
        DiagramLoadError: If the document does not match the diagram schema
    """
    if not isinstance(data, dict):
        raise DiagramLoadError(
            f"Diagram document must be a mapping, got {type(data).__name__}",
            diagram_file=source,
        )
    try:
        diagram = DiagramSchema.model_validate(data).to_domain()
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc_str = " -> ".join(str(loc) for loc in error.get("loc", ())) or "Model Level"
            details.append(f"{loc_str}: {error.get('msg', 'Unknown validation error')}")
        raise DiagramLoadError(
            "Diagram validation failed: " + "; ".join(details),
            diagram_file=source,
        ) from e

    logger.debug(
        f"Parsed diagram with {len(diagram.tables)} tables and "
        f"{len(diagram.relationships)} relationships"
    )
    return diagram


def load_diagram(path: Union[str, Path]) -> models.Diagram:
    """
    Load a diagram file, decoding YAML for ``.yaml``/``.yml`` files and JSON otherwise.

    Raises:
        DiagramLoadError: If the file cannot be read, decoded or validated
    """
    diagram_file = Path(path)
    try:
        with open(diagram_file, "r", encoding="utf-8") as f:
            if diagram_file.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise DiagramLoadError(f"Could not read diagram file: {e}", diagram_file=str(path)) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DiagramLoadError(f"Could not decode diagram file: {e}", diagram_file=str(path)) from e

    logger.debug(f"Loaded diagram document from {path}")
    return parse_diagram(data, source=str(path))
