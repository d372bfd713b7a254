"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering of the
TypeScript blocks, with in-memory templates registered by name.
"""

from typing import Dict, Any

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, templates: Dict[str, str] = None):
        """
        Initialize template engine.

        Args:
            templates: Mapping of template name to template source
        """
        self._loader = DictLoader(dict(templates or {}))
        self._env = Environment(
            loader=self._loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a registered template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template is registered."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True


# A member line is "<indent><key>[?]: <type>[ | null];"
TS_INTERFACE_TEMPLATE = """\
{% if doc_line %}
{{ doc_line }}
{% endif %}
export interface {{ type_name }} {
{% for member in members %}
{% if member.doc_line %}
{{ indent }}{{ member.doc_line }}
{% endif %}
{{ indent }}{{ member.key }}{% if member.optional %}?{% endif %}: {{ member.annotation }};
{% endfor %}
}
"""

TS_SCHEMA_TEMPLATE = """\
export interface {{ schema_name }} {
{% for entry in entries %}
{{ indent }}{{ entry.key }}: {{ entry.type_name }}{% if entry.is_array %}[]{% endif %};
{% endfor %}
}
"""

BUILTIN_TEMPLATES = {
    "ts_interface": TS_INTERFACE_TEMPLATE,
    "ts_schema": TS_SCHEMA_TEMPLATE,
}


def create_template_engine() -> TemplateEngine:
    """Create a template engine preloaded with the built-in templates."""
    return TemplateEngine(BUILTIN_TEMPLATES)
