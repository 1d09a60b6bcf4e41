"""CSS framework installer.

Installs the styling stack the user picked and patches the base scaffold so
the stack is actually loaded: entry-file imports, the bundler plugin for
Tailwind, or CDN tags in the HTML head for Bootstrap (CDN).
"""

from __future__ import annotations

from collections.abc import Iterable

from hyperstart.models import CssFramework
from hyperstart.scaffolder.component_library import ComponentLibraryInstaller
from hyperstart.scaffolder.installer import BaseInstaller, InstallResult
from hyperstart.scaffolder.patching import (
    add_import,
    add_vite_plugin,
    insert_after_tag,
    insert_before,
    remove_import,
)

BOOTSTRAP_VERSION = "5.3.3"
BOOTSTRAP_CSS_URL = (
    f"https://cdn.jsdelivr.net/npm/bootstrap@{BOOTSTRAP_VERSION}/dist/css/bootstrap.min.css"
)
BOOTSTRAP_JS_URL = (
    f"https://cdn.jsdelivr.net/npm/bootstrap@{BOOTSTRAP_VERSION}/dist/js/bootstrap.bundle.min.js"
)
BOOTSTRAP_CSS_IMPORT = "import 'bootstrap/dist/css/bootstrap.min.css';"

_VITE_PACKAGES: dict[CssFramework, list[str]] = {
    CssFramework.TAILWIND: ["tailwindcss", "@tailwindcss/vite"],
    CssFramework.TAILWIND_SHADCN: ["tailwindcss", "@tailwindcss/vite"],
    CssFramework.BOOTSTRAP_CDN: [],
    CssFramework.BOOTSTRAP_PACKAGE: ["bootstrap", "react-bootstrap"],
    CssFramework.MUI: ["@mui/material", "@emotion/react", "@emotion/styled"],
}

_NEXT_TAILWIND = ["tailwindcss", "@tailwindcss/postcss", "postcss"]


def packages_for(framework: CssFramework, *, vite: bool) -> list[str]:
    if not vite and framework in (CssFramework.TAILWIND, CssFramework.TAILWIND_SHADCN):
        return list(_NEXT_TAILWIND)
    return list(_VITE_PACKAGES[framework])


def bootstrap_cdn_head_jsx() -> str:
    """``<head>`` block for a framework whose document shell is JSX."""
    return (
        "\n      <head>\n"
        f'        <link rel="stylesheet" href="{BOOTSTRAP_CSS_URL}" crossOrigin="anonymous" />\n'
        f'        <script src="{BOOTSTRAP_JS_URL}" crossOrigin="anonymous" async />\n'
        "      </head>"
    )


class CssInstaller(BaseInstaller):
    """Installs and wires one CSS framework."""

    name = "css"

    async def install(
        self, framework: CssFramework, components: Iterable[str] = ()
    ) -> InstallResult:
        result, mark = self._start()
        await self.install_packages(result, packages_for(framework, vite=self.layout.is_vite))

        if framework == CssFramework.BOOTSTRAP_CDN:
            await self._link_bootstrap_cdn()
        elif framework in (CssFramework.TAILWIND, CssFramework.TAILWIND_SHADCN):
            await self._setup_tailwind(theme=framework == CssFramework.TAILWIND_SHADCN)
        elif framework == CssFramework.BOOTSTRAP_PACKAGE:
            await self._patch_entry(BOOTSTRAP_CSS_IMPORT)
        elif framework == CssFramework.MUI:
            await self._patch_entry(None)

        result = self._finish(result, mark)

        if framework == CssFramework.TAILWIND_SHADCN:
            library = ComponentLibraryInstaller(
                self.sink, self.layout, self.runner, self.renderer, npm=self.npm, npx=self.npx
            )
            delegated = await library.install(components)
            result.packages.extend(delegated.packages)
            result.commands.extend(delegated.commands)
            result.files_written.extend(delegated.files_written)
            result.files_patched.extend(delegated.files_patched)
        return result

    # -- Entry file ----------------------------------------------------------

    def _stylesheet_specifiers(self) -> list[str]:
        """Module specifiers the entry file uses for the base stylesheets."""
        entry_dir = self.layout.entry_file.rsplit("/", 1)[0]
        specs = []
        for sheet in (self.layout.global_stylesheet, self.layout.default_stylesheet):
            sheet_dir, sheet_name = sheet.rsplit("/", 1)
            if sheet_dir == entry_dir:
                specs.append(f"./{sheet_name}")
        return specs

    async def _patch_entry(self, import_statement: str | None) -> None:
        """Drop the base stylesheet imports and put *import_statement* on top."""
        entry = self.layout.require_entry(self.sink)
        text = await self.sink.read_text(entry)
        patched = text
        for spec in self._stylesheet_specifiers():
            patched = remove_import(patched, spec)
        if import_statement:
            patched = add_import(patched, import_statement)
        if patched != text:
            await self.sink.patch(entry, patched)

    # -- Frameworks ----------------------------------------------------------

    async def _setup_tailwind(self, *, theme: bool) -> None:
        if self.layout.is_vite:
            if self.sink.exists("vite.config.js"):
                text = await self.sink.read_text("vite.config.js")
                patched = add_vite_plugin(
                    text, "import tailwindcss from '@tailwindcss/vite'", "tailwindcss()"
                )
                if patched != text:
                    await self.sink.patch("vite.config.js", patched)
        else:
            await self.render("css/postcss.config.mjs.j2", "postcss.config.mjs")

        await self.render("css/global.css.j2", self.layout.global_stylesheet, theme=theme)
        sheet_name = self.layout.global_stylesheet.rsplit("/", 1)[1]
        await self._patch_entry(f"import './{sheet_name}';")

    async def _link_bootstrap_cdn(self) -> None:
        if self.layout.is_vite:
            if not self.sink.exists("index.html"):
                return
            text = await self.sink.read_text("index.html")
            patched = insert_before(
                text,
                "</head>",
                f'<link rel="stylesheet" href="{BOOTSTRAP_CSS_URL}" crossorigin="anonymous">',
            )
            patched = insert_before(
                patched,
                "</body>",
                f'<script src="{BOOTSTRAP_JS_URL}" crossorigin="anonymous"></script>',
            )
            if patched != text:
                await self.sink.patch("index.html", patched)
            return

        entry = self.layout.require_entry(self.sink)
        text = await self.sink.read_text(entry)
        patched = insert_after_tag(text, r"<html[^>]*>", bootstrap_cdn_head_jsx())
        if patched != text:
            await self.sink.patch(entry, patched)
