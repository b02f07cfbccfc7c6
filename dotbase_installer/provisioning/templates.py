"""Template rendering with Jinja2."""

import logging
from pathlib import Path
from typing import Any, Mapping, Union

from jinja2 import Environment, FileSystemLoader, TemplateError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """
    Renders templates from one directory.

    Undefined variables render as empty strings, so optional answers that
    were never asked simply disappear from the output. Optional sections use
    ``{% if USE_SENTRY %}`` style blocks.
    """

    def __init__(self, template_dir: Union[str, Path]):
        self.template_dir = Path(template_dir)
        self.environment = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a template by file name.

        Raises:
            FileNotFoundError: If the template does not exist
            TemplateError: If rendering fails
        """
        template_path = self.template_dir / template_name
        if not template_path.exists():
            logger.error("Template file not found: %s", template_path)
            raise FileNotFoundError(f"Template file not found: {template_path}")

        logger.debug("Rendering %s with %d context keys", template_name, len(context))

        try:
            template = self.environment.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            logger.error("Failed to render template %s: %s", template_name, e)
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e
