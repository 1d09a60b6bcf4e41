"""Jinja2 template rendering for generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``hyperstart/scaffolder/templates/`` directory and renders them with the
answer-derived context.  Supports single-file rendering, batch tree rendering
through a ``FileSink``, and string-based rendering for inline fragments.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from hyperstart.scaffolder.sink import FileSink


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated React projects.

    Templates live under a configurable directory; page templates import the
    per-element macros from ``fragments/ui.j2``.  Undefined variables raise
    instead of rendering as empty strings, so a template can never silently
    drop a value.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            # JSX uses ``{{ ... }}`` for inline style objects.
            variable_start_string="{=",
            variable_end_string="=}",
        )
        # Register custom filters
        self.env.filters["js_string"] = _js_string_filter
        self.env.filters["jsx_text"] = _jsx_text_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"pages/Dashboard.jsx.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Sink-based rendering (async) --------------------------------------

    async def render_to_sink(
        self,
        template_path: str,
        sink: FileSink,
        rel_path: str,
        context: dict[str, Any],
    ) -> str:
        """Render a template and write the result to *rel_path* in *sink*.

        Returns *rel_path*.
        """
        content = self.render(template_path, context)
        await sink.write(rel_path, content)
        return rel_path

    async def render_tree(
        self,
        template_prefix: str,
        sink: FileSink,
        output_dir: str,
        context: dict[str, Any],
    ) -> list[str]:
        """Render every ``*.j2`` file under *template_prefix* into *output_dir*.

        The directory structure is preserved: ``pwa/public/pwa-192x192.svg.j2``
        rendered with ``template_prefix="pwa/public"`` and
        ``output_dir="public"`` is written to ``public/pwa-192x192.svg``.

        Returns:
            List of written paths relative to the sink root.
        """
        prefix_path = self.template_dir / template_prefix
        if not prefix_path.is_dir():
            return []

        written: list[str] = []
        for template_file in sorted(prefix_path.rglob("*.j2")):
            rel = template_file.relative_to(prefix_path).as_posix()
            output_name = rel[: -len(".j2")]
            target = f"{output_dir}/{output_name}" if output_dir else output_name
            await self.render_to_sink(f"{template_prefix}/{rel}", sink, target, context)
            written.append(target)
        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_JSX_SPECIAL = set("{}<>")


def _js_string_filter(value: Any) -> str:
    """Quote *value* as a JavaScript string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def _jsx_text_filter(value: Any) -> str:
    """Make *value* safe as JSX child text.

    Plain text is emitted verbatim; text containing JSX syntax characters is
    wrapped in an expression container holding a string literal.
    """
    text = str(value)
    if _JSX_SPECIAL.intersection(text):
        return "{" + _js_string_filter(text) + "}"
    return text
