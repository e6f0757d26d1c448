"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files

        Raises:
            TemplateError: If template_dir is given but does not exist
        """
        if template_dir is not None and not template_dir.is_dir():
            raise TemplateError(f"Template directory not found: {template_dir}")

        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir is not None:
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def add_filter(self, name: str, func: Callable[..., Any]):
        """Register a template filter."""
        self._env.filters[name] = func

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def require_template(self, template_name: str):
        """
        Fail early when a template is missing.

        Raises:
            TemplateError: If the template cannot be loaded
        """
        if not self.template_exists(template_name):
            raise TemplateError(
                f"Template {template_name} not found in {self.template_dir}"
            )
        logger.debug("Template %s loaded from %s", template_name, self.template_dir)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine for a directory, or an in-memory one."""
    return TemplateEngine(template_dir)
