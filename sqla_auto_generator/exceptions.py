"""
Custom exception hierarchy for SQLA Auto Generator.

This module provides the exception system used by the generator core and the
command line tool. Every exception carries optional context and recovery
suggestions so that the CLI can print an actionable message.
"""

from typing import Dict, Any, Optional, List


class SQLAAutoGeneratorError(Exception):
    """
    Base exception for all SQLA Auto Generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class DiagramReferenceError(SQLAAutoGeneratorError, ReferenceError):
    """
    Raised when a relationship names a table or field id absent from the diagram.

    This is the only fatal condition of model generation.
    """

    def __init__(
        self,
        message: str,
        relationship_id: Optional[str] = None,
        table_id: Optional[str] = None,
        field_id: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context', {})
        if relationship_id:
            context['relationship_id'] = relationship_id
        if table_id:
            context['table_id'] = table_id
        if field_id:
            context['field_id'] = field_id

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that both relationship endpoints exist in the diagram",
                "Remove relationships left behind by deleted tables or fields",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="REFERENCE_ERROR"
        )
        self.relationship_id = relationship_id
        self.table_id = table_id
        self.field_id = field_id


class ConfigurationError(SQLAAutoGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify option values against the documented defaults",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class DiagramLoadError(SQLAAutoGeneratorError):
    """Raised when a diagram file cannot be read or fails validation."""

    def __init__(self, message: str, diagram_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if diagram_file:
            context['diagram_file'] = diagram_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Export the diagram again as JSON",
                "Check that every table, field and relationship has the required keys",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="DIAGRAM_LOAD_ERROR"
        )


def raise_reference_error(
    message: str,
    relationship_id: str = None,
    table_id: str = None,
    field_id: str = None,
    **kwargs
):
    """Convenience function to raise dangling reference errors."""
    raise DiagramReferenceError(
        message,
        relationship_id=relationship_id,
        table_id=table_id,
        field_id=field_id,
        **kwargs
    )
