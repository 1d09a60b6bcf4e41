"""shadcn/ui component-library installer.

Prepares a Tailwind project for shadcn/ui (helper packages, ``components.json``,
the ``cn`` helper and the ``@`` import alias) and then asks the shadcn CLI to
add the requested components under ``src/components/ui``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from hyperstart.scaffolder.installer import BaseInstaller, InstallResult
from hyperstart.scaffolder.patching import add_vite_alias

HELPER_PACKAGES: list[str] = [
    "class-variance-authority",
    "clsx",
    "tailwind-merge",
    "lucide-react",
    "tw-animate-css",
]

# Named exports each component module provides, in import order.
COMPONENT_EXPORTS: dict[str, tuple[str, ...]] = {
    "button": ("Button",),
    "card": ("Card", "CardHeader", "CardTitle", "CardDescription", "CardContent", "CardFooter"),
    "input": ("Input",),
    "select": ("Select", "SelectContent", "SelectItem", "SelectTrigger", "SelectValue"),
    "textarea": ("Textarea",),
    "badge": ("Badge",),
    "progress": ("Progress",),
    "avatar": ("Avatar", "AvatarImage", "AvatarFallback"),
}

UI_IMPORT_ROOT = "@/components/ui"


def components_json(global_stylesheet: str, rsc: bool) -> dict:
    return {
        "$schema": "https://ui.shadcn.com/schema.json",
        "style": "new-york",
        "rsc": rsc,
        "tsx": False,
        "tailwind": {
            "config": "",
            "css": global_stylesheet,
            "baseColor": "neutral",
            "cssVariables": True,
            "prefix": "",
        },
        "aliases": {
            "components": "@/components",
            "utils": "@/lib/utils",
            "ui": "@/components/ui",
            "lib": "@/lib",
            "hooks": "@/hooks",
        },
        "iconLibrary": "lucide",
    }


JSCONFIG: dict = {
    "compilerOptions": {
        "baseUrl": ".",
        "paths": {"@/*": ["./src/*"]},
    }
}


class ComponentLibraryInstaller(BaseInstaller):
    """Installs shadcn/ui and the requested components."""

    name = "component-library"

    async def install(self, components: Iterable[str]) -> InstallResult:
        requested = list(dict.fromkeys(components))
        result, mark = self._start()

        await self.install_packages(result, HELPER_PACKAGES)

        config = components_json(self.layout.global_stylesheet, rsc=not self.layout.is_vite)
        await self.sink.write("components.json", json.dumps(config, indent=2) + "\n")
        await self.render("library/utils.js.j2", "src/lib/utils.js")
        await self._configure_alias()

        if requested:
            cmd = [self.npx, "shadcn@latest", "add", *requested, "--yes"]
            await self.runner.run(cmd, cwd=self.sink.root)
            result.commands.append(" ".join(cmd))

        return self._finish(result, mark)

    async def _configure_alias(self) -> None:
        # create-next-app already writes a jsconfig.json with the "@/*" alias.
        if not self.sink.exists("jsconfig.json"):
            await self.sink.write("jsconfig.json", json.dumps(JSCONFIG, indent=2) + "\n")
        if self.layout.is_vite and self.sink.exists("vite.config.js"):
            text = await self.sink.read_text("vite.config.js")
            patched = add_vite_alias(text)
            if patched != text:
                await self.sink.patch("vite.config.js", patched)
