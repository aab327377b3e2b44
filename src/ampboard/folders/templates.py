"""Link template resolution and rendering."""

from collections.abc import Iterable, Mapping

from ampboard.core.models.template import URL_NAME_PLACEHOLDER, Template
from ampboard.utils.html import escape, strip_tags

DEFAULT_TEMPLATE_NAME = "basic"
FALLBACK_TEMPLATE_HTML = '<li><a href="/{urlName}">{urlName}</a></li>'


def index_templates(templates: Iterable[Template]) -> dict[str, Template]:
    """Index templates by name; a later duplicate replaces an earlier one."""
    return {template.name: template for template in templates}


class TemplateResolver:
    """Resolves template names to HTML and renders folder items with them.

    Lookup order: the exact name, then the template named ``basic``,
    then a built-in anchor list item.
    """

    def __init__(self, templates_by_name: Mapping[str, Template] | None = None) -> None:
        self._templates = dict(templates_by_name or {})

    def resolve(self, name: str) -> str:
        """Return the HTML of the template called ``name``."""
        template = self._templates.get(name)
        if template is not None:
            return template.html
        basic = self._templates.get(DEFAULT_TEMPLATE_NAME)
        if basic is not None:
            return basic.html
        return FALLBACK_TEMPLATE_HTML

    @staticmethod
    def render(html: str, url_name: str, disable_links: bool = False) -> str:
        """Substitute the escaped ``url_name`` for every placeholder.

        Only the substituted value is escaped; the template markup is
        used as written. With ``disable_links`` every tag other than
        ``li``, ``div`` and ``span`` is stripped.
        """
        rendered = html.replace(URL_NAME_PLACEHOLDER, escape(url_name))
        if disable_links:
            rendered = strip_tags(rendered)
        return rendered
