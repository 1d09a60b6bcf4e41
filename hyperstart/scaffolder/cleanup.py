"""Removes the base scaffold's default stylesheets and their imports.

Runs after composition and before the basic template's finalize step.  Every
operation is a no-op when its target is already gone, so the step can be
repeated safely.
"""

from __future__ import annotations

import posixpath

from pydantic import BaseModel, Field

from hyperstart.models import CssFramework
from hyperstart.scaffolder.layout import ProjectLayout
from hyperstart.scaffolder.patching import remove_import
from hyperstart.scaffolder.sink import FileSink

_KEEPS_GLOBAL_STYLESHEET = frozenset({CssFramework.TAILWIND, CssFramework.TAILWIND_SHADCN})


class CleanupResult(BaseModel):
    deleted: list[str] = Field(default_factory=list)
    patched: list[str] = Field(default_factory=list)


def _specifier(from_file: str, stylesheet: str) -> str:
    rel = posixpath.relpath(stylesheet, posixpath.dirname(from_file))
    return rel if rel.startswith(".") else f"./{rel}"


async def _strip_import(sink: FileSink, rel_path: str | None, stylesheet: str) -> bool:
    if rel_path is None or not sink.exists(rel_path):
        return False
    text = await sink.read_text(rel_path)
    patched = remove_import(text, _specifier(rel_path, stylesheet))
    if patched == text:
        return False
    await sink.patch(rel_path, patched)
    return True


async def cleanup(
    sink: FileSink,
    layout: ProjectLayout,
    css_framework: CssFramework,
) -> CleanupResult:
    """Delete unused default stylesheets and drop the imports that load them."""
    result = CleanupResult()

    if await sink.delete(layout.default_stylesheet):
        result.deleted.append(layout.default_stylesheet)

    if css_framework not in _KEEPS_GLOBAL_STYLESHEET:
        if await sink.delete(layout.global_stylesheet):
            result.deleted.append(layout.global_stylesheet)
        entry = layout.find_entry(sink)
        if await _strip_import(sink, entry, layout.global_stylesheet):
            result.patched.append(entry)

    root = layout.find_root_component(sink)
    if await _strip_import(sink, root, layout.default_stylesheet):
        result.patched.append(root)

    return result
