"""Name-template rendering backed by Jinja2.

Templates see the release fields (``project_name``, ``version``, ``tag``,
``commit``) and the environment as ``env``. Undefined variables are
errors, never empty strings.
"""

from __future__ import annotations

from typing import Any

import jinja2

from artiforge.core.errors import TemplateError

_TEMPLATE_NAME = "tmpl"

_env = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


class TemplateRenderer:
    """Renders templates against a fixed base context.

    Parameters
    ----------
    context:
        Base variables available to every template.
    """

    def __init__(self, context: dict[str, Any]) -> None:
        self._context = dict(context)

    def render(self, template: str) -> str:
        """Render *template*.

        Raises
        ------
        TemplateError
            On syntax errors, undefined variables or failing expressions.
            The message carries the template line where Jinja2 reports one.
        """
        try:
            return _env.from_string(template).render(self._context)
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateError(
                f"template: {_TEMPLATE_NAME}:{exc.lineno}: {exc.message}"
            ) from exc
        except jinja2.TemplateError as exc:
            raise TemplateError(f"template: {_TEMPLATE_NAME}: {exc.message}") from exc
        except (TypeError, ValueError) as exc:
            raise TemplateError(f"template: {_TEMPLATE_NAME}: {exc}") from exc

    def render_all(self, templates: list[str]) -> list[str]:
        """Render each template, in order."""
        return [self.render(t) for t in templates]
