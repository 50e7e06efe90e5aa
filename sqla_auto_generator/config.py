"""
Configuration for SQLA Auto Generator.

``GeneratorOptions`` is the only option set the generator core accepts.
``ToolConfigSchema`` describes the command line tool's YAML configuration,
which ``load_config`` merges with explicitly given CLI arguments.
"""

import logging
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sqla_auto_generator.constants import RelationshipDefaults
from sqla_auto_generator.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("Cascade policy cannot be empty or just whitespace.")
    return stripped


class GeneratorOptions(BaseModel):
    """Options of one model generation run."""

    cascade: str = Field(
        default=RelationshipDefaults.DEFAULT_CASCADE,
        description="Cascade policy of one-to-many collection attributes.",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("cascade")
    @classmethod
    def check_cascade(cls, v: str) -> str:
        """Reject blank cascade policies."""
        return _non_blank(v)


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    input_file: Optional[str] = Field(
        default=None, description="Diagram file (JSON or YAML) to generate models from."
    )
    output_file: Optional[str] = Field(
        default=None, description="File to write the models to; stdout when omitted."
    )
    format_code: bool = Field(
        default=False, description="Whether to format the generated code with black."
    )
    cascade: Optional[str] = Field(
        default=None,
        description="Cascade policy override for one-to-many collection attributes.",
    )

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )

    @field_validator("cascade")
    @classmethod
    def check_cascade(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank cascade policies."""
        return _non_blank(v)

    def generator_options(self) -> GeneratorOptions:
        """Generator options derived from this configuration."""
        if self.cascade is None:
            return GeneratorOptions()
        return GeneratorOptions(cascade=self.cascade)


def _read_yaml_config(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.is_file():
        logger.warning(f"Config file not found at {config_path}. Using defaults and CLI arguments.")
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=config_path) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config file {config_path}: {e}", config_file=config_path) from e

    if yaml_config is None:
        return {}
    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            f"Content in config file {config_path} is not a mapping",
            config_file=config_path,
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return yaml_config


def load_config(config_path: Optional[str], cli_args: Namespace) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.

    Raises:
        ConfigurationError: If the file cannot be parsed or validation fails
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        raw_config.update(_read_yaml_config(config_path))

    # 2. Override with CLI arguments (only those explicitly provided)
    overridden_keys = set()
    for key, value in vars(cli_args).items():
        if value is not None and key in ToolConfigSchema.model_fields:
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    # 3. Validate
    try:
        validated_config = ToolConfigSchema.model_validate(raw_config)
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc_str = " -> ".join(str(loc) for loc in error.get("loc", ())) or "Model Level"
            details.append(f"{loc_str}: {error.get('msg', 'Unknown validation error')}")
        raise ConfigurationError(
            "Configuration validation failed: " + "; ".join(details),
            config_file=config_path,
        ) from e

    logger.debug("Configuration loaded and validated successfully.")
    return validated_config
