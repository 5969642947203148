"""
Render Engine
Turns a page's component tree into a standalone HTML document.

Rendering is a pure function of (page, options): no I/O happens here, and
the same input always yields byte-identical output, which is what lets the
optional LRU cache sit in front of it.
"""

import time
from typing import Optional

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

from ..components.registry import ComponentRegistry
from ..core.cache import LRUCache
from ..core.hash import hash_fields
from ..core.json import safe_json_dumps
from ..core.logging_config import get_logger
from ..monitoring import MetricsCollector, metrics_collector
from ..tree.documents import dump_page
from ..tree.models import ComponentNode, Page
from .context import RenderContext, RenderOptions
from .renderers import unknown_component
from .styles import BASE_STYLESHEET

logger = get_logger(__name__)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <meta name="description" content="{{ description }}">
  <meta name="keywords" content="{{ keywords }}">
{%- if editor %}
  <meta name="generator" content="pagebuilder">
{%- endif %}
  <style>{{ stylesheet }}</style>
</head>
<body>
  <div id="page-root">{{ content }}</div>
{%- if scripts %}
  <script>{{ bootstrap }}</script>
{%- endif %}
</body>
</html>
"""

BOOTSTRAP_SCRIPT = """
document.addEventListener('DOMContentLoaded', function () {
  document.documentElement.classList.add('wb-ready');
});
"""


def _jinja_env() -> Environment:
    return Environment(
        loader=DictLoader({
            "page.html": PAGE_TEMPLATE,
            "page.min.html": minify_shell(PAGE_TEMPLATE),
        }),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


def minify_shell(html: str) -> str:
    """Strip indentation and line breaks from template source or fixed assets"""
    return "".join(line.strip() for line in html.splitlines())


class RenderEngine:
    """
    Renders pages through the renderers registered for each component type.

    Unknown or renderer-less types produce an HTML comment so one bad node
    never fails the whole page.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        lang: str = "en",
        cache_enabled: bool = True,
        cache_size: int = 64,
        metrics: Optional[MetricsCollector] = None
    ):
        self.registry = registry
        self.lang = lang
        self.metrics = metrics or metrics_collector
        self.cache: Optional[LRUCache[str]] = LRUCache(max_size=cache_size) if cache_enabled else None
        self._env = _jinja_env()

    def render_page(self, page: Page, options: Optional[RenderOptions] = None) -> str:
        """
        Render a full HTML document.

        Args:
            page: Page to render; it is not modified
            options: Render options, defaults when omitted

        Returns:
            HTML document string
        """
        options = options or RenderOptions()
        start = time.perf_counter()

        key = None
        if self.cache is not None:
            key = self.cache_key(page, options)
            cached = self.cache.get(key)
            if cached is not None:
                self._record("hit", start)
                return cached

        html = self._render_document(page, options)

        if self.cache is not None and key is not None:
            self.cache.set(key, html)
            self._record("miss", start)
        else:
            self._record("off", start)

        logger.debug("page_rendered", page_id=page.id, size=len(html))
        return html

    def render_node(self, node: ComponentNode, options: Optional[RenderOptions] = None) -> str:
        """Render one node and its subtree to an HTML fragment"""
        options = options or RenderOptions()
        renderer = self.registry.renderer_for(node.type)

        if renderer is None:
            logger.warning("render_unknown_type", type=node.type, node_id=node.id)
            return unknown_component(node.type)

        return renderer.render(node, RenderContext(engine=self, options=options))

    def cache_key(self, page: Page, options: RenderOptions) -> str:
        """Digest of the page document, the options and the registry version"""
        return hash_fields(
            dump_page(page),
            safe_json_dumps(options.model_dump()),
            self.lang,
            str(self.registry.version),
        )

    def clear_cache(self) -> None:
        if self.cache is not None:
            logger.info("render_cache_cleared", **self.cache.stats.to_dict())
            self.cache.clear()

    def _render_document(self, page: Page, options: RenderOptions) -> str:
        content = self.render_node(page.root, options)
        minify = options.optimize_for_production
        template = self._env.get_template("page.min.html" if minify else "page.html")

        stylesheet = minify_shell(BASE_STYLESHEET) if minify else BASE_STYLESHEET
        bootstrap = minify_shell(BOOTSTRAP_SCRIPT) if minify else BOOTSTRAP_SCRIPT

        return template.render(
            lang=self.lang,
            title=page.title,
            description=page.metadata.description,
            keywords=page.metadata.keywords,
            editor=options.include_editor_metadata,
            stylesheet=Markup(stylesheet),
            content=Markup(content),
            scripts=options.add_scripts,
            bootstrap=Markup(bootstrap),
        )

    def _record(self, cache: str, start: float) -> None:
        self.metrics.record_render(cache, time.perf_counter() - start)
