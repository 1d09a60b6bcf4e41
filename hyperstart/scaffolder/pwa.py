"""Progressive Web App installer.

Vite projects get ``vite-plugin-pwa`` registered in ``vite.config.js`` with a
manifest naming the project; Next-style projects get an ``app/manifest.js``
route.  Both get the ``usePWA`` install/online hook and placeholder icons.
"""

from __future__ import annotations

from hyperstart.scaffolder.installer import BaseInstaller, InstallResult
from hyperstart.scaffolder.patching import add_vite_plugin, insert_before

THEME_COLOR = "#2563eb"
BACKGROUND_COLOR = "#ffffff"


class PwaInstaller(BaseInstaller):
    """Makes the generated project installable."""

    name = "pwa"

    async def install(self, enabled: bool, project_name: str = "") -> InstallResult:
        result, mark = self._start()
        if not enabled:
            return result

        ctx = {
            "project_name": project_name,
            "theme_color": THEME_COLOR,
            "background_color": BACKGROUND_COLOR,
        }
        if self.layout.is_vite:
            await self.install_packages(result, ["vite-plugin-pwa"], dev=True)
            await self._register_plugin(ctx)
            await self._add_theme_meta()
        else:
            await self.render("pwa/manifest.js.j2", "src/app/manifest.js", **ctx)

        await self.render("pwa/usePWA.js.j2", "src/hooks/usePWA.js", **ctx)
        await self.renderer.render_tree("pwa/public", self.sink, "public", self.context(**ctx))

        return self._finish(result, mark)

    async def _register_plugin(self, ctx: dict) -> None:
        if not self.sink.exists("vite.config.js"):
            return
        call = self.renderer.render("pwa/vite-plugin.js.j2", self.context(**ctx)).strip()
        text = await self.sink.read_text("vite.config.js")
        patched = add_vite_plugin(text, "import { VitePWA } from 'vite-plugin-pwa'", call)
        if patched != text:
            await self.sink.patch("vite.config.js", patched)

    async def _add_theme_meta(self) -> None:
        if not self.sink.exists("index.html"):
            return
        text = await self.sink.read_text("index.html")
        patched = insert_before(
            text, "</head>", f'<meta name="theme-color" content="{THEME_COLOR}" />'
        )
        if patched != text:
            await self.sink.patch("index.html", patched)
