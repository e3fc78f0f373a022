"""
Screen template system for Stone Forge.

Jinja2-based templates for every screen the state machine can show.
"""

from decimal import Decimal
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

from jinja2 import Environment, FileSystemLoader, DictLoader, TemplateNotFound

logger = logging.getLogger(__name__)


class ScreenRenderer:
    """
    Jinja2-based screen template engine.

    Templates are read from template_dir when it exists, otherwise from
    DEFAULT_TEMPLATES.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        if self.template_dir is not None and Path(self.template_dir).exists():
            self.env = Environment(
                loader=FileSystemLoader(str(self.template_dir)),
                trim_blocks=True,
                lstrip_blocks=True,
            )
        else:
            self.env = Environment(
                loader=DictLoader(DEFAULT_TEMPLATES),
                trim_blocks=True,
                lstrip_blocks=True,
            )

        self.env.filters['chance'] = self._format_chance
        self.env.filters['keys'] = self._format_keys

    def _format_chance(self, value) -> str:
        """Format a probability as a percentage."""
        try:
            return f"{Decimal(str(value)) * 100:.0f}%"
        except (ArithmeticError, ValueError, TypeError):
            return f"{value}"

    def _format_keys(self, value) -> str:
        """Join key characters with spaces."""
        return " ".join(str(key) for key in value)

    def load_template(self, template_name: str):
        """Load a template by name, trying a .j2 suffix second."""
        try:
            return self.env.get_template(template_name)
        except TemplateNotFound:
            try:
                return self.env.get_template(f"{template_name}.j2")
            except TemplateNotFound:
                return None

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        template = self.load_template(template_name)
        if template:
            return template.render(**context)

        # Built-in copy when a custom template_dir lacks this screen
        if template_name in DEFAULT_TEMPLATES:
            return self.env.from_string(DEFAULT_TEMPLATES[template_name]).render(**context)

        logger.warning("Screen template %s not found", template_name)
        return f"[Template '{template_name}' not found]"

    def render_lines(self, template_name: str, context: Dict[str, Any]) -> List[str]:
        """Render a template and split it into display lines."""
        return self.render(template_name, context).strip('\n').split('\n')


# =============================================================================
# BUILT-IN TEMPLATES
# =============================================================================

DEFAULT_TEMPLATES = {
    'initial.txt': '''
Print either '{{ start_key }}' to start or '{{ stats_key }}' to get statistics.
''',

    'processing.txt': '''
{% for feature in features %}
{{ feature.name }}: {{ feature.attempts }}|{{ max_attempts }}, {{ feature.successes }}
{% endfor %}
Success chance: {{ success_probability | chance }}
{% if complete %}
All features are used up. Press any key to return home.
{% else %}
Press key(one of available: {{ available | keys }}) to try increase relevant feature of stone.
{% endif %}
''',

    'statistics.txt': '''
Your results:
{% for pair, count in rows %}
{{ pair[0] }}-{{ pair[1] }}: {{ count }}
{% endfor %}
Press any key to return home.
''',

    'wrong_input.txt': '''
Wrong input, try again please.
''',

    'farewell.txt': '''
Goodbye.
''',
}


# Global renderer instance
_renderer: Optional[ScreenRenderer] = None


def get_screen_renderer() -> ScreenRenderer:
    """Get or create the global screen renderer."""
    global _renderer
    if _renderer is None:
        _renderer = ScreenRenderer()
    return _renderer


def render_screen(template_name: str, context: Dict[str, Any]) -> List[str]:
    """Convenience function to render a screen into lines."""
    return get_screen_renderer().render_lines(template_name, context)
